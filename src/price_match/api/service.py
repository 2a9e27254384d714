"""Service layer for the price matching API."""

import asyncio
import io
import logging
from typing import Optional

from ..config import PriceMatchConfigManager
from ..main import PriceMatchingEngine
from ..models import ColumnLayout, ReconciliationPolicy
from .models import CompareOptions, RepriceOptions

logger = logging.getLogger(__name__)


class PriceMatchService:
    """Service layer that runs the matching engine on uploaded files."""

    def __init__(self, config_manager: Optional[PriceMatchConfigManager] = None) -> None:
        self.engine = PriceMatchingEngine(config_manager)

    async def compare(self, primary: bytes, secondary: bytes, options: CompareOptions) -> str:
        """
        Compare two uploaded dealer files and return CSV text.
        Wraps synchronous processing to avoid blocking.
        """
        return await asyncio.to_thread(self._compare_sync, primary, secondary, options)

    async def reprice(self, catalog: bytes, dealer: bytes, options: RepriceOptions) -> str:
        """
        Reprice an uploaded catalog and return CSV text.
        Wraps synchronous processing to avoid blocking.
        """
        return await asyncio.to_thread(self._reprice_sync, catalog, dealer, options)

    def _compare_sync(self, primary: bytes, secondary: bytes, options: CompareOptions) -> str:
        primary_layout = ColumnLayout(
            delimiter=options.delimiter,
            code_index=options.primary_code_index,
            price_index=options.primary_price_index,
            dealer_index=options.dealer_column,
            description_index=options.description_index,
            weight_index=options.weight_index,
            worst_price_index=options.worst_price_index,
            worst_dealer_index=options.worst_dealer_index,
        )
        secondary_layout = ColumnLayout(
            delimiter=options.delimiter,
            code_index=options.secondary_code_index,
            price_index=options.secondary_price_index,
        )
        policy = ReconciliationPolicy(
            dealer_column=options.dealer_column,
            # 0 from an empty form field means "not set"
            explicit_dealer_number=options.dealer_number or None,
            offset_percentage=options.offset_percentage,
            include_additional_columns=options.additional_columns,
            include_description=options.description_index >= 0,
            include_weight=options.weight_index >= 0,
        )

        output = self.engine.compare_streams(
            io.BytesIO(primary), primary_layout, io.BytesIO(secondary), secondary_layout, policy
        )
        logger.info(f"Successfully processed comparison: {len(output.rows)} rows")
        return self.engine.to_csv(output.header, output.rows)

    def _reprice_sync(self, catalog: bytes, dealer: bytes, options: RepriceOptions) -> str:
        dealer_layout = ColumnLayout(
            delimiter=options.delimiter,
            code_index=options.dealer_code_index,
            price_index=options.dealer_price_index,
            dealer_index=options.dealer_label_index,
            worst_price_index=options.worst_price_index,
            worst_dealer_index=options.worst_dealer_index,
        )

        output = self.engine.reprice_streams(
            io.BytesIO(catalog),
            options.delimiter,
            io.BytesIO(dealer),
            dealer_layout,
            price_index=options.price_index,
            code_index=options.code_index,
            percentage=options.percentage,
            include_dealer=options.include_dealer,
            include_additional_columns=options.additional_columns,
        )
        logger.info(f"Successfully processed repricing: {len(output.rows)} rows")
        return self.engine.to_csv(output.header, output.rows)
