"""Account endpoints."""

from fastapi import APIRouter, Depends, Response

from farm_ledger.api.deps import Principal, get_account_service, get_current_user, require_admin
from farm_ledger.api.schemas import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    AccountUpdate,
    BalanceAuditResponse,
)
from farm_ledger.services import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=AccountListResponse)
def list_accounts(
    principal: Principal = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List the caller's accounts."""
    accounts = service.list_accounts(principal.user_id)
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    principal: Principal = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create an account with an opening balance."""
    account = service.create_account(
        user_id=principal.user_id,
        method=data.method,
        currency=data.currency,
        opening_balance=data.balance,
    )
    return AccountResponse.model_validate(account)


@router.get("/admin/all", response_model=AccountListResponse)
def list_all_accounts(
    _: Principal = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List every user's accounts (admin only)."""
    accounts = service.list_all_accounts()
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    principal: Principal = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get one of the caller's accounts."""
    return AccountResponse.model_validate(service.get_account(principal.user_id, account_id))


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    data: AccountUpdate,
    principal: Principal = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Rename an account or change its currency; the balance is not editable."""
    account = service.update_account(
        principal.user_id,
        account_id,
        method=data.method,
        currency=data.currency,
    )
    return AccountResponse.model_validate(account)


@router.get("/{account_id}/audit", response_model=BalanceAuditResponse)
def audit_account_balance(
    account_id: int,
    principal: Principal = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> BalanceAuditResponse:
    """Check the stored balance against the transaction history."""
    audit = service.audit_balance(principal.user_id, account_id)
    return BalanceAuditResponse(
        account_id=audit.account_id,
        stored_balance=audit.stored_balance,
        expected_balance=audit.expected_balance,
        drift=audit.drift,
        transaction_count=audit.transaction_count,
        is_consistent=audit.is_consistent,
    )


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: int,
    principal: Principal = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
) -> Response:
    """Delete an account and its transactions."""
    service.delete_account(principal.user_id, account_id)
    return Response(status_code=204)
