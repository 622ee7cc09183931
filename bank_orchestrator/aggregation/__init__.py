"""
Aggregations over ledger data:
- summary.py: AccountSummaryAggregator
- feed.py: TransactionFeedAggregator
"""

from .feed import TransactionFeedAggregator  # noqa: F401
from .summary import AccountSummaryAggregator  # noqa: F401
