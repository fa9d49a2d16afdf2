"""Transaction repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from farm_ledger.domain.models import Transaction
from farm_ledger.domain.views import TransactionDetail


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction; the returned copy carries its id."""
        ...

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def get_owned(
        self,
        txn_id: int,
        user_id: str,
        for_update: bool = False,
    ) -> Optional[Transaction]:
        """Retrieve a transaction through its account, filtered on the account owner."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        ...

    def delete(self, txn_id: int) -> None:
        """Delete a transaction; raises StaleWriteError if it is already gone."""
        ...

    def delete_by_account(self, account_id: int) -> int:
        """Delete all transactions of an account; returns the number removed."""
        ...

    def list_by_account(self, account_id: int) -> list[Transaction]:
        """List all transactions for an account, oldest first."""
        ...

    def get_detail(self, txn_id: int) -> Optional[TransactionDetail]:
        """Retrieve a transaction enriched with category and account summaries."""
        ...

    def list_details(
        self,
        account_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[TransactionDetail]:
        """List enriched transactions in ``[start, end]``, newest first."""
        ...
