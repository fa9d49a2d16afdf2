"""Pydantic schemas for category endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Request schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=50, description="Income, Expense, crops, animals...")
    icon: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=20)


class CategoryUpdate(BaseModel):
    """Request schema for updating a category (absent fields keep their value)."""

    name: Optional[str] = Field(default=None, max_length=100)
    type: Optional[str] = Field(default=None, max_length=50)
    icon: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=20)


class CategoryResponse(BaseModel):
    """Response schema for a single category."""

    model_config = {"from_attributes": True}

    category_id: int
    name: str
    type: str
    icon: Optional[str] = None
    color: Optional[str] = None
