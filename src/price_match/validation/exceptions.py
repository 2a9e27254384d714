"""Custom exceptions for dealer price matching."""

from typing import Any, Dict, List, Optional


class PriceMatchError(Exception):
    """
    Base exception for price matching failures.

    Provides structured error information for debugging and reporting.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None
    ):
        """
        Initialize PriceMatchError with detailed error information.

        Args:
            message: Human-readable error message
            errors: List of detailed error dictionaries
            field: Specific setting or column that caused the failure
            value: The value that caused the failure
        """
        super().__init__(message)
        self.errors = errors or []
        self.field = field
        self.value = value

    def __str__(self) -> str:
        """Return detailed error message."""
        parts = [str(self.args[0]) if self.args else "Price match error"]

        if self.field:
            parts.append(f"Field: {self.field}")

        if self.value is not None:
            parts.append(f"Value: {self.value}")

        if self.errors:
            parts.append(f"Errors: {self.errors}")

        return " | ".join(parts)


class CSVReadError(PriceMatchError):
    """Raised when a dealer or catalog file cannot be read at all."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize CSV read error.

        Args:
            message: Error message
            source: Name of the stream or file that failed
            **kwargs: Additional arguments passed to PriceMatchError
        """
        super().__init__(message, **kwargs)
        self.source = source

    def __str__(self) -> str:
        """Return CSV-specific error message."""
        base_msg = super().__str__()

        if self.source:
            return f"{base_msg} | Source: {self.source}"
        return base_msg


class ColumnLayoutError(PriceMatchError):
    """Raised when column positions supplied by the caller cannot be applied."""
