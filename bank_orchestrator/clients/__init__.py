from .ledger_client import LedgerClient  # noqa: F401
