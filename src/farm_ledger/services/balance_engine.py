"""
Balance arithmetic for transaction create/update/delete.

Pure functions over already-resolved inputs: no I/O, no lookups, no
failure modes. Callers persist the returned balances together with the
transaction change in one unit of work.

Amounts are applied in each account's own currency; moving a transaction
between accounts of different currencies applies the raw amount to both.
"""

from decimal import Decimal

from farm_ledger.domain.models import Account, TransactionType


def balance_delta(txn_type: TransactionType, amount: Decimal) -> Decimal:
    """Signed effect of a transaction on its account."""
    if txn_type == TransactionType.INCOME:
        return amount
    return -amount


def apply_create(account: Account, txn_type: TransactionType, amount: Decimal) -> Decimal:
    """Balance of ``account`` after recording a new transaction."""
    return account.balance + balance_delta(txn_type, amount)


def apply_delete(account: Account, txn_type: TransactionType, amount: Decimal) -> Decimal:
    """Balance of ``account`` after removing a transaction (reverses apply_create)."""
    return account.balance - balance_delta(txn_type, amount)


def apply_update(
    old_account: Account,
    old_type: TransactionType,
    old_amount: Decimal,
    new_account: Account,
    new_type: TransactionType,
    new_amount: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Balances after replacing the old transaction state with the new one.

    Returns ``(old_account_balance, new_account_balance)``. When both refer
    to the same account the reversal and the application are summed into a
    single value, returned in both positions.
    """
    reversal = -balance_delta(old_type, old_amount)
    application = balance_delta(new_type, new_amount)

    if old_account.account_id == new_account.account_id:
        combined = old_account.balance + reversal + application
        return combined, combined

    return old_account.balance + reversal, new_account.balance + application
