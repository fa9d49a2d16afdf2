"""Farm Ledger - account balances and transaction history for farm and household finance."""

__version__ = "0.1.0"
