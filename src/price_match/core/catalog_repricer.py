"""Inserts a marked-up dealer price column into the firm's product catalog."""

from typing import Dict, List, Optional, Sequence, Tuple
import logging

from ..config import PriceMatchConfigManager
from ..models import PriceRecord
from ..normalizers import parse_price_result, resolve_zero_padded
from ..utils.formatting import format_ratio, format_repriced
from ..utils.row_projector import OutputColumn, RowProjector, insert_column
from ..validation import ColumnLayoutError
from .price_index import PriceLookup

logger = logging.getLogger(__name__)


class CatalogRepricer:
    """Adds a "new price" column to catalog rows from a dealer price list.

    The new column lands right after the catalog's existing price column.
    Dealer attribution and comparison columns, when enabled, are appended at
    the end of every row.
    """

    def __init__(self, config_manager: Optional[PriceMatchConfigManager] = None):
        """Initialize the repricer.

        Args:
            config_manager: Optional config manager. Creates default if None.
        """
        self.config_manager = config_manager or PriceMatchConfigManager()

    def reprice(
        self,
        header: Sequence[str],
        rows: Sequence[Sequence[str]],
        price_index: int,
        code_index: int,
        dealer_prices: PriceLookup,
        percentage: float = 0.0,
        include_dealer: bool = False,
        include_additional_columns: bool = False,
    ) -> Tuple[List[str], List[List[str]]]:
        """Reprice a catalog.

        Args:
            header: Catalog header row
            rows: Catalog data rows
            price_index: 1-based position of the catalog's price column
            code_index: 0-based position of the catalog's product code column
            dealer_prices: Dealer records keyed by product code
            percentage: Markup applied to dealer prices
            include_dealer: Append the dealer label column
            include_additional_columns: Append worst price, worst dealer and price ratio

        Returns:
            Tuple of (header, rows) with the inserted and appended columns

        Raises:
            ColumnLayoutError: If a column position is negative
        """
        if price_index < 0:
            raise ColumnLayoutError(
                "Price position must not be negative", field="price_index", value=price_index
            )
        if code_index < 0:
            raise ColumnLayoutError(
                "Code position must not be negative", field="code_index", value=code_index
            )

        siblings = RowProjector.for_catalog_siblings(
            include_dealer, include_additional_columns, self.config_manager
        )
        new_price_header = self.config_manager.get_column_header(OutputColumn.NEW_PRICE.value)

        repriced_header = insert_column(header, price_index, new_price_header) + siblings.header()

        repriced_rows = []
        matched = 0
        for row in rows:
            code = row[code_index].strip() if code_index < len(row) else ""
            record, found = resolve_zero_padded(code, dealer_prices)
            if found and record is not None:
                matched += 1

            values = self._dealer_values(record, percentage)
            new_price = values.pop(OutputColumn.NEW_PRICE, self.config_manager.na_marker)

            repriced_rows.append(insert_column(row, price_index, new_price) + siblings.project(values))

        logger.info(f"Repriced catalog: {matched} of {len(rows)} products found in dealer prices")
        return repriced_header, repriced_rows

    def _dealer_values(
        self, record: Optional[PriceRecord], percentage: float
    ) -> Dict[OutputColumn, str]:
        """Render the new price and sibling values for a catalog row."""
        if record is None:
            return {}

        markup = 1 + percentage / 100
        values = {
            OutputColumn.NEW_PRICE: format_repriced(record.price * markup, self.config_manager),
            OutputColumn.DEALER: record.dealer_label,
        }

        worst = parse_price_result(record.worst_price).value if record.worst_price else None
        if worst is not None:
            values[OutputColumn.WORST_PRICE] = format_repriced(worst * markup, self.config_manager)
            values[OutputColumn.WORST_DEALER] = record.worst_dealer_label or ""
            if record.price:
                values[OutputColumn.PRICE_RATIO] = format_ratio(
                    (worst - record.price) / record.price * 100
                )

        return values
