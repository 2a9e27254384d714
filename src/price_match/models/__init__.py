"""Price match models module."""

from .price_record import PriceRecord
from .policy import ColumnLayout, ReconciliationPolicy, DISABLED_COLUMN
from .reconciliation_row import ReconciliationRow, MatchStatus

__all__ = [
    "PriceRecord",
    "ColumnLayout",
    "ReconciliationPolicy",
    "DISABLED_COLUMN",
    "ReconciliationRow",
    "MatchStatus",
]
