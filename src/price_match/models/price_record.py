"""Price record data model for dealer price matching."""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class PriceRecord(BaseModel):
    """Represents a single row of a dealer price list after normalization.

    The code keeps its original casing and leading zeros; only surrounding
    whitespace is removed. Display fields are carried through unchanged.
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable for thread safety
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    code: str = Field(..., description="Product code as written in the dealer file")
    price: float = Field(..., description="Parsed price, 0.0 when the token was unparsable")
    price_parsed: bool = Field(default=True, description="Whether the price token parsed cleanly")

    dealer_label: str = Field(default="", description="Raw dealer label column value")
    description: str = Field(default="", description="Free text, doubles as replacement code")
    weight: str = Field(default="", description="Pass-through display field")

    # Carried over from an upstream reconciliation pass
    worst_price: Optional[str] = Field(default=None, description="Upstream worst price token")
    worst_dealer_label: Optional[str] = Field(
        default=None, description="Upstream worst dealer label"
    )

    row_number: int = Field(default=0, ge=0, description="1-based line number in the source file")

    @property
    def has_code(self) -> bool:
        """Check whether this record can take part in code matching."""
        return bool(self.code)

    @property
    def display_id(self) -> str:
        """Get a display-friendly ID for logging and output."""
        return f"{self.code or '<empty>'}@{self.row_number}"

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"PriceRecord({self.display_id}: {self.price})"
