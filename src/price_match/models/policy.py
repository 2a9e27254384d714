"""Reader layout and reconciliation policy models."""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

DISABLED_COLUMN = -1


class ColumnLayout(BaseModel):
    """Positions of the columns the record reader extracts from a CSV file.

    All indices are zero-based. Optional columns use -1 to mark them absent.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=";", min_length=1, max_length=1, description="Field delimiter")
    code_index: int = Field(default=0, ge=0, description="Product code column")
    price_index: int = Field(default=1, ge=0, description="Price column")

    dealer_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    description_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    weight_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    worst_price_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)
    worst_dealer_index: int = Field(default=DISABLED_COLUMN, ge=DISABLED_COLUMN)

    @property
    def required_width(self) -> int:
        """Minimum number of fields a row needs to yield a record."""
        return max(self.code_index, self.price_index) + 1

    @property
    def carries_upstream_worst(self) -> bool:
        """Check if this layout reads the output of an earlier comparison."""
        return self.worst_price_index >= 0


class ReconciliationPolicy(BaseModel):
    """Price selection policy for one reconciliation run."""

    model_config = ConfigDict(frozen=True)

    dealer_column: int = Field(
        default=DISABLED_COLUMN,
        ge=DISABLED_COLUMN,
        description="Primary dealer label column, -1 uses the default label",
    )
    explicit_dealer_number: Optional[int] = Field(
        default=None, ge=0, description="Label given to the second dealer when it wins"
    )
    offset_percentage: Optional[float] = Field(
        default=None,
        ge=0,
        description="Savings at or below this percentage do not switch dealers",
    )
    include_additional_columns: bool = Field(
        default=False, description="Emit worst price, worst dealer and price ratio"
    )
    include_description: bool = Field(default=False, description="Emit the description column")
    include_weight: bool = Field(default=False, description="Emit the weight column")

    @property
    def uses_dealer_column(self) -> bool:
        return self.dealer_column >= 0
