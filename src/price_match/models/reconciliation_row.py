"""Reconciliation result data model for dealer price matching."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class MatchStatus(str, Enum):
    """How an output row came about."""

    MATCHED = "matched"  # Code found in both dealer files
    PRIMARY_ONLY = "primary_only"  # Code only in the first dealer file
    SECONDARY_ONLY = "secondary_only"  # Code only in the second dealer file


class ReconciliationRow(BaseModel):
    """One consolidated product line before rendering.

    Missing comparison values stay None here and are rendered as the
    configured "not available" marker by the row projector.
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable for audit trail
        validate_assignment=True,
    )

    code: str = Field(..., description="Product code from the winning side of the lookup")
    best_price: float = Field(..., description="Selected price")
    dealer_label: str = Field(..., description="Dealer the best price is attributed to")
    status: MatchStatus = Field(..., description="Whether both files carried the code")

    # None renders as the "not available" marker
    description: Optional[str] = Field(default="", description="Pass-through description")
    weight: Optional[str] = Field(default="", description="Pass-through weight")

    worst_price: Optional[float] = Field(default=None, description="Losing price")
    worst_dealer_label: Optional[str] = Field(default=None, description="Dealer of the losing price")

    @property
    def dealer_switched(self) -> bool:
        """Check if the best price came from a different dealer than the losing one."""
        return self.worst_dealer_label is not None and self.worst_dealer_label != self.dealer_label

    @property
    def price_ratio(self) -> Optional[float]:
        """Spread between worst and best price as a percentage of the best price."""
        if self.worst_price is None or self.best_price == 0:
            return None
        return (self.worst_price - self.best_price) / self.best_price * 100
