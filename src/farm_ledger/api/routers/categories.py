"""Category endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from farm_ledger.api.deps import Principal, get_category_service, get_current_user
from farm_ledger.api.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from farm_ledger.services import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(
    category_type: Optional[str] = Query(None, alias="type", description="Only categories of this type"),
    _: Principal = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    """List categories."""
    return [CategoryResponse.model_validate(c) for c in service.list_categories(category_type)]


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreate,
    _: Principal = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a category."""
    category = service.create_category(
        name=data.name,
        category_type=data.type,
        icon=data.icon,
        color=data.color,
    )
    return CategoryResponse.model_validate(category)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    _: Principal = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Get a category by ID."""
    return CategoryResponse.model_validate(service.get_category(category_id))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    data: CategoryUpdate,
    _: Principal = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Update a category."""
    category = service.update_category(
        category_id,
        name=data.name,
        category_type=data.type,
        icon=data.icon,
        color=data.color,
    )
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: int,
    _: Principal = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> Response:
    """Delete a category no transaction is filed under."""
    service.delete_category(category_id)
    return Response(status_code=204)
