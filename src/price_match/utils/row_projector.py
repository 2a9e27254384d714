"""Renders output headers and rows from a named list of columns."""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from ..config import PriceMatchConfigManager
from ..models import ReconciliationPolicy, ReconciliationRow
from ..validation import ColumnLayoutError
from .formatting import format_optional_price, format_ratio


class OutputColumn(str, Enum):
    """Columns the system can emit, keyed by their config header name."""

    CODE = "code"
    BEST_PRICE = "best_price"
    DEALER = "dealer"
    DESCRIPTION = "description"
    WEIGHT = "weight"
    WORST_PRICE = "worst_price"
    WORST_DEALER = "worst_dealer"
    PRICE_RATIO = "price_ratio"
    NEW_PRICE = "new_price"


COMPARISON_COLUMNS = (
    OutputColumn.WORST_PRICE,
    OutputColumn.WORST_DEALER,
    OutputColumn.PRICE_RATIO,
)


def insert_column(row: Sequence[str], position: int, value: str) -> List[str]:
    """
    Insert a value into a row, appending when the position is past the end.

    Examples:
        >>> insert_column(["a", "b", "c"], 1, "x")
        ['a', 'x', 'b', 'c']
        >>> insert_column(["a", "b"], 5, "x")
        ['a', 'b', 'x']
    """
    if position < 0:
        raise ColumnLayoutError("Column position must not be negative", field="position", value=position)

    projected = list(row)
    if position >= len(projected):
        projected.append(value)
    else:
        projected.insert(position, value)
    return projected


class RowProjector:
    """Projects rows onto an ordered list of output columns.

    The column list is decided once from the enabled options, so every
    combination of optional columns renders header and rows consistently.
    """

    def __init__(
        self,
        columns: Sequence[OutputColumn],
        config_manager: Optional[PriceMatchConfigManager] = None,
    ):
        """Initialize the projector.

        Args:
            columns: Output columns in render order
            config_manager: Optional config manager. Creates default if None.
        """
        if len(set(columns)) != len(columns):
            raise ColumnLayoutError("Output columns must be unique", value=[c.value for c in columns])

        self.columns = tuple(columns)
        self.config_manager = config_manager or PriceMatchConfigManager()

    @classmethod
    def for_policy(
        cls,
        policy: ReconciliationPolicy,
        config_manager: Optional[PriceMatchConfigManager] = None,
    ) -> "RowProjector":
        """Build the reconciliation layout for a policy."""
        columns = [OutputColumn.CODE, OutputColumn.BEST_PRICE, OutputColumn.DEALER]
        if policy.include_description:
            columns.append(OutputColumn.DESCRIPTION)
        if policy.include_weight:
            columns.append(OutputColumn.WEIGHT)
        if policy.include_additional_columns:
            columns.extend(COMPARISON_COLUMNS)
        return cls(columns, config_manager)

    @classmethod
    def for_catalog_siblings(
        cls,
        include_dealer: bool,
        include_additional_columns: bool,
        config_manager: Optional[PriceMatchConfigManager] = None,
    ) -> "RowProjector":
        """Build the layout of the columns appended to repriced catalog rows."""
        columns: List[OutputColumn] = []
        if include_dealer:
            columns.append(OutputColumn.DEALER)
        if include_additional_columns:
            columns.extend(COMPARISON_COLUMNS)
        return cls(columns, config_manager)

    def header(self) -> List[str]:
        """Get display headers for the configured columns."""
        return [self.config_manager.get_column_header(column.value) for column in self.columns]

    def project(self, values: Mapping[OutputColumn, str]) -> List[str]:
        """Order rendered values by the configured columns.

        Columns without a value render as the "not available" marker.
        """
        na_marker = self.config_manager.na_marker
        return [values.get(column, na_marker) for column in self.columns]

    def render(self, row: ReconciliationRow) -> List[str]:
        """Render one reconciliation row."""
        ratio = row.price_ratio
        values: Dict[OutputColumn, str] = {
            OutputColumn.CODE: row.code,
            OutputColumn.BEST_PRICE: format_optional_price(row.best_price, self.config_manager),
            OutputColumn.DEALER: row.dealer_label,
            OutputColumn.DESCRIPTION: self._text_or_na(row.description),
            OutputColumn.WEIGHT: self._text_or_na(row.weight),
            OutputColumn.WORST_PRICE: format_optional_price(row.worst_price, self.config_manager),
            OutputColumn.WORST_DEALER: self._text_or_na(row.worst_dealer_label),
            OutputColumn.PRICE_RATIO: (
                format_ratio(ratio) if ratio is not None else self.config_manager.na_marker
            ),
        }
        return self.project(values)

    def _text_or_na(self, value: Optional[str]) -> str:
        return value if value is not None else self.config_manager.na_marker

    def render_all(self, rows: Sequence[ReconciliationRow]) -> List[List[str]]:
        return [self.render(row) for row in rows]
