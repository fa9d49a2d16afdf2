"""Transaction endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from farm_ledger.api.deps import (
    Principal,
    get_command_service,
    get_current_user,
    get_query_service,
    require_admin,
)
from farm_ledger.api.schemas import (
    PeriodSummaryResponse,
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdateRequest,
)
from farm_ledger.domain.views import TransactionDetail
from farm_ledger.services import (
    TransactionCommandService,
    TransactionCreate,
    TransactionQueryService,
    TransactionUpdate,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])

# Request field name -> TransactionUpdate field name
_UPDATE_FIELDS = {
    "account_id": "account_id",
    "category_id": "category_id",
    "amount": "amount",
    "type": "txn_type",
    "note": "note",
    "date": "date",
}


def _list_response(details: list[TransactionDetail]) -> TransactionListResponse:
    return TransactionListResponse(
        transactions=[TransactionResponse.from_detail(d) for d in details],
        count=len(details),
    )


# Admin routes are declared before /{account_id} so the path matcher sees them first


@router.get("/admin/all", response_model=TransactionListResponse)
def list_all_transactions(
    interval: str = Query("all"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    _: Principal = Depends(require_admin),
    queries: TransactionQueryService = Depends(get_query_service),
) -> TransactionListResponse:
    """All transactions across all accounts (admin only)."""
    return _list_response(queries.list_all_transactions(interval, start_date, end_date))


@router.get("/admin/{account_id}", response_model=TransactionListResponse)
def list_all_transactions_for_account(
    account_id: int,
    interval: str = Query("all"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    _: Principal = Depends(require_admin),
    queries: TransactionQueryService = Depends(get_query_service),
) -> TransactionListResponse:
    """An account's transactions regardless of owner (admin only)."""
    return _list_response(
        queries.list_all_transactions_for_account(account_id, interval, start_date, end_date)
    )


@router.get("/{account_id}", response_model=TransactionListResponse)
def list_transactions(
    account_id: int,
    interval: str = Query("monthly", description="daily, weekly, monthly, yearly, all or interval"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    principal: Principal = Depends(get_current_user),
    queries: TransactionQueryService = Depends(get_query_service),
) -> TransactionListResponse:
    """List the caller's transactions on an account, newest first."""
    details = queries.list_transactions(
        principal.user_id,
        account_id,
        interval,
        start_date,
        end_date,
    )
    return _list_response(details)


@router.get("/{account_id}/summary", response_model=PeriodSummaryResponse)
def summarize_transactions(
    account_id: int,
    interval: str = Query("monthly"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    principal: Principal = Depends(get_current_user),
    queries: TransactionQueryService = Depends(get_query_service),
) -> PeriodSummaryResponse:
    """Income and expense totals for an account over a window."""
    summary = queries.summarize(principal.user_id, account_id, interval, start_date, end_date)
    return PeriodSummaryResponse.from_summary(summary)


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreateRequest,
    principal: Principal = Depends(get_current_user),
    commands: TransactionCommandService = Depends(get_command_service),
) -> TransactionResponse:
    """Record a transaction and update the account balance."""
    detail = commands.create(
        principal.user_id,
        TransactionCreate(
            account_id=data.account_id,
            category_id=data.category_id,
            amount=data.amount,
            txn_type=data.type,
            note=data.note,
            date=data.date,
        ),
    )
    return TransactionResponse.from_detail(detail)


@router.put("/{txn_id}", response_model=TransactionResponse)
def update_transaction(
    txn_id: int,
    data: TransactionUpdateRequest,
    principal: Principal = Depends(get_current_user),
    commands: TransactionCommandService = Depends(get_command_service),
) -> TransactionResponse:
    """Edit a transaction; only the fields present in the body change."""
    patch = TransactionUpdate(
        **{_UPDATE_FIELDS[name]: getattr(data, name) for name in data.model_fields_set}
    )
    detail = commands.update(principal.user_id, txn_id, patch)
    return TransactionResponse.from_detail(detail)


@router.delete("/{txn_id}", status_code=204)
def delete_transaction(
    txn_id: int,
    principal: Principal = Depends(get_current_user),
    commands: TransactionCommandService = Depends(get_command_service),
) -> Response:
    """Delete a transaction and reverse its balance effect."""
    commands.delete(principal.user_id, txn_id)
    return Response(status_code=204)
