"""Dealer price matching: best price reconciliation across dealer price lists."""

from .main import PriceMatchingEngine, ReconciliationOutput, RepricingOutput
from .models import ColumnLayout, ReconciliationPolicy

__version__ = "0.1.0"

__all__ = [
    "PriceMatchingEngine",
    "ReconciliationOutput",
    "RepricingOutput",
    "ColumnLayout",
    "ReconciliationPolicy",
]
