"""Merges two dealer price lists into one best-price row per product."""

from typing import Any, Dict, List, Optional, Sequence
import logging

from ..config import PriceMatchConfigManager
from ..matchers import BestPriceMatcher
from ..models import MatchStatus, PriceRecord, ReconciliationPolicy, ReconciliationRow
from ..normalizers import resolve_code
from .dealer_pool import SecondaryDealerPool
from .price_index import PriceLookup

logger = logging.getLogger(__name__)


class Reconciler:
    """Reconciles the first dealer's ordered records against the second dealer's lookup.

    Output order follows the first dealer file; second-dealer codes that
    nothing matched are appended afterwards in second-file order.
    """

    def __init__(
        self,
        config_manager: Optional[PriceMatchConfigManager] = None,
        matcher: Optional[BestPriceMatcher] = None,
    ):
        """Initialize the reconciler.

        Args:
            config_manager: Optional config manager. Creates default if None.
            matcher: Optional price selection matcher. Creates default if None.
        """
        self.config_manager = config_manager or PriceMatchConfigManager()
        self.matcher = matcher or BestPriceMatcher(self.config_manager)

    def reconcile(
        self,
        primary: Sequence[PriceRecord],
        secondary: PriceLookup,
        policy: ReconciliationPolicy,
    ) -> List[ReconciliationRow]:
        """Produce consolidated rows for both dealer files.

        Args:
            primary: Records of the first dealer file in file order
            secondary: Code-keyed lookup of the second dealer file
            policy: Price selection policy

        Returns:
            One row per first-dealer record plus one per unmatched second-dealer code
        """
        logger.info(
            f"Reconciling {len(primary)} primary records against {len(secondary)} secondary codes"
        )

        pool = SecondaryDealerPool(secondary)
        secondary_label = self.config_manager.get_secondary_dealer_label(
            policy.explicit_dealer_number
        )

        rows = [self._reconcile_record(record, pool, policy, secondary_label) for record in primary]

        for record in pool.get_unprocessed_records():
            rows.append(
                ReconciliationRow(
                    code=record.code,
                    best_price=record.price,
                    dealer_label=secondary_label,
                    status=MatchStatus.SECONDARY_ONLY,
                    description=None,
                    weight=None,
                )
            )

        statistics = pool.get_match_statistics()
        logger.info(
            f"Reconciliation produced {len(rows)} rows; "
            f"{statistics['unprocessed_secondary_count']} secondary-only codes appended"
        )
        return rows

    def _reconcile_record(
        self,
        record: PriceRecord,
        pool: SecondaryDealerPool,
        policy: ReconciliationPolicy,
        secondary_label: str,
    ) -> ReconciliationRow:
        """Build the output row for one first-dealer record."""
        primary_label = self._primary_label(record, policy)

        match, found = resolve_code(record.code, record.description, pool.lookup)
        if not found or match is None:
            return ReconciliationRow(
                code=record.code,
                best_price=record.price,
                dealer_label=primary_label,
                status=MatchStatus.PRIMARY_ONLY,
                description=record.description,
                weight=record.weight,
            )

        pool.mark_as_processed(record.code, match.code)
        selection = self.matcher.select(record, match, primary_label, secondary_label, policy)

        return ReconciliationRow(
            code=record.code,
            best_price=selection.best_price,
            dealer_label=selection.dealer_label,
            status=MatchStatus.MATCHED,
            description=record.description,
            weight=record.weight,
            worst_price=selection.worst_price,
            worst_dealer_label=selection.worst_dealer_label,
        )

    def _primary_label(self, record: PriceRecord, policy: ReconciliationPolicy) -> str:
        """Get the dealer label of a first-dealer record."""
        if policy.uses_dealer_column and record.dealer_label:
            return record.dealer_label
        return self.config_manager.get_primary_dealer_label()


def summarize_rows(rows: Sequence[ReconciliationRow], secondary_label: str) -> Dict[str, Any]:
    """Get statistics about a set of reconciliation rows.

    Args:
        rows: Reconciled rows
        secondary_label: Label attributed to the second dealer

    Returns:
        Dictionary with per-status counts and second-dealer wins
    """
    status_counts = {status.value: 0 for status in MatchStatus}
    for row in rows:
        status_counts[row.status.value] += 1

    secondary_wins = sum(
        1 for row in rows
        if row.status == MatchStatus.MATCHED
        and row.dealer_label == secondary_label
        and row.dealer_switched
    )
    matched = status_counts[MatchStatus.MATCHED.value]

    return {
        "total_rows": len(rows),
        "matched_count": matched,
        "primary_only_count": status_counts[MatchStatus.PRIMARY_ONLY.value],
        "secondary_only_count": status_counts[MatchStatus.SECONDARY_ONLY.value],
        "secondary_wins": secondary_wins,
        "primary_wins": matched - secondary_wins,
    }
