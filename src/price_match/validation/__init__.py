"""Error types for price matching."""

from .exceptions import PriceMatchError, CSVReadError, ColumnLayoutError

__all__ = [
    "PriceMatchError",
    "CSVReadError",
    "ColumnLayoutError",
]
