"""Best price selection between two dealers for one product."""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from ..config import PriceMatchConfigManager
from ..models import PriceRecord, ReconciliationPolicy
from ..normalizers import parse_price_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceSelection:
    """Winning and losing price for one matched product."""

    best_price: float
    dealer_label: str
    worst_price: float
    worst_dealer_label: str


class BestPriceMatcher:
    """Picks the cheaper of two dealer prices for the same product.

    A cheaper second-dealer price only wins when its saving exceeds the
    policy's offset percentage. When the first dealer file already carries
    a worst price from an earlier comparison, the lower of the losing prices
    is reported as worst.
    """

    def __init__(self, config_manager: PriceMatchConfigManager):
        """Initialize the matcher.

        Args:
            config_manager: Configuration manager with the "not available" marker
        """
        self.config_manager = config_manager

    def select(
        self,
        primary: PriceRecord,
        secondary: PriceRecord,
        primary_label: str,
        secondary_label: str,
        policy: ReconciliationPolicy,
    ) -> PriceSelection:
        """Select best and worst price for a matched pair of records.

        Args:
            primary: Record from the first dealer file
            secondary: Record resolved from the second dealer file
            primary_label: Dealer label attributed to the first record
            secondary_label: Dealer label attributed to the second record
            policy: Reconciliation policy with the offset band

        Returns:
            PriceSelection with best and worst price attribution
        """
        if secondary.price < primary.price:
            if self._within_offset(primary.price, secondary.price, policy.offset_percentage):
                logger.debug(
                    f"Keeping {primary.display_id}: {secondary.price} is within "
                    f"{policy.offset_percentage}% of {primary.price}"
                )
                return PriceSelection(
                    best_price=primary.price,
                    dealer_label=primary_label,
                    worst_price=primary.price,
                    worst_dealer_label=primary_label,
                )

            return PriceSelection(
                best_price=secondary.price,
                dealer_label=secondary_label,
                worst_price=primary.price,
                worst_dealer_label=primary_label,
            )

        worst_price, worst_dealer_label = self._select_worst(primary, secondary.price, secondary_label)
        return PriceSelection(
            best_price=primary.price,
            dealer_label=primary_label,
            worst_price=worst_price,
            worst_dealer_label=worst_dealer_label,
        )

    def _within_offset(
        self, primary_price: float, secondary_price: float, offset_percentage: Optional[float]
    ) -> bool:
        """Check if a saving is too small to switch dealers."""
        if offset_percentage is None or primary_price <= 0:
            return False

        saving = (primary_price - secondary_price) / primary_price * 100
        return saving <= offset_percentage

    def _select_worst(
        self, primary: PriceRecord, secondary_price: float, secondary_label: str
    ) -> tuple[float, str]:
        """Pick the worst price when the first dealer keeps the best price."""
        upstream_worst = primary.worst_price
        if upstream_worst is None or upstream_worst in ("", self.config_manager.na_marker):
            return secondary_price, secondary_label

        upstream_value = parse_price_result(upstream_worst).value
        if not upstream_value:
            upstream_value = primary.price

        if secondary_price > upstream_value:
            return upstream_value, primary.worst_dealer_label or ""

        return secondary_price, secondary_label

    def get_rule_info(self) -> Dict[str, Any]:
        """Get information about the selection rule.

        Returns:
            Dict containing rule metadata and requirements
        """
        return {
            "rule_name": "Best Price",
            "description": "Per product, the cheaper dealer wins unless the saving is inside the offset band",
            "requirements": [
                "Codes match exactly, by leading-zero variant, or by replacement code",
                "Second dealer wins only when strictly cheaper",
                "Savings at or below the offset percentage keep the first dealer",
                "Upstream worst prices are kept when lower than the new losing price",
            ],
        }
