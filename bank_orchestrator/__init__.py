"""
bank_orchestrator

Client-side orchestration between a banking UI and the remote ledger:
- clients/: LedgerClient (HTTP + error mapping)
- aggregation/: account summary and merged transaction feed
- guards/: input parsing and transfer validation
- transfer/: TransferSubmitter
- context/: session collaborators and user-triggered retry
"""

from .orchestrator import BankOrchestrator  # noqa: F401
