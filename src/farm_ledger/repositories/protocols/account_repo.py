"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from farm_ledger.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def get_owned(self, account_id: int, user_id: str) -> Optional[Account]:
        """Retrieve account by ID only if it belongs to ``user_id``."""
        ...

    def list_by_user(self, user_id: str) -> list[Account]:
        """List a user's accounts."""
        ...

    def list_all(self) -> list[Account]:
        """List every account."""
        ...

    def lock_for_update(self, account_ids: list[int]) -> dict[int, Account]:
        """Lock and re-read accounts in ascending id order; missing ids are absent."""
        ...

    def save_balance(self, account: Account, new_balance: Decimal) -> Account:
        """
        Compare-and-swap the balance against ``account.version``.

        Raises StaleWriteError when the stored version moved on.
        """
        ...

    def update_details(self, account: Account) -> Account:
        """Write the descriptive fields (method, currency); never the balance."""
        ...

    def delete(self, account_id: int) -> None:
        """Delete an account (hard delete)."""
        ...
