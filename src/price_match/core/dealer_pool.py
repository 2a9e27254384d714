"""Tracks which second-dealer codes were consumed during a reconciliation."""

from typing import List, Set, Dict, Any
import logging

from ..models import PriceRecord
from .price_index import PriceLookup

logger = logging.getLogger(__name__)


class SecondaryDealerPool:
    """Wraps the second dealer's lookup for a single reconciliation call.

    Every code that a first-dealer record resolves to is marked processed.
    Whatever is left afterwards is the second dealer's exclusive inventory
    and must still reach the output.
    """

    def __init__(self, lookup: PriceLookup):
        """Initialize the pool over a second-dealer lookup.

        Args:
            lookup: Code-keyed records of the second dealer file
        """
        self._lookup = lookup
        self._original_count = len(lookup)

        self._processed_codes: Set[str] = set()

        # (primary_code, secondary_code) pairs for audit trail
        self._match_history: List[tuple[str, str]] = []

        logger.info(f"Initialized secondary dealer pool with {self._original_count} records")

    @property
    def lookup(self) -> PriceLookup:
        return self._lookup

    def is_processed(self, code: str) -> bool:
        """Check if a second-dealer code has already been matched."""
        return code in self._processed_codes

    def mark_as_processed(self, primary_code: str, secondary_code: str) -> bool:
        """Mark a second-dealer code as matched by a first-dealer record.

        Args:
            primary_code: Code as written in the first dealer file
            secondary_code: Code of the resolved second-dealer record

        Returns:
            True if the code was newly marked, False if it was already processed
        """
        self._match_history.append((primary_code, secondary_code))

        if secondary_code in self._processed_codes:
            logger.debug(f"Secondary code {secondary_code} matched again by {primary_code}")
            return False

        self._processed_codes.add(secondary_code)
        logger.debug(f"Marked secondary code {secondary_code} as processed (via {primary_code})")
        return True

    def get_unprocessed_records(self) -> List[PriceRecord]:
        """Get second-dealer records no first-dealer record matched, in file order."""
        return [
            record for record in self._lookup.records()
            if record.code not in self._processed_codes
        ]

    def get_match_statistics(self) -> Dict[str, Any]:
        """Get statistics about consumption of the second dealer file.

        Returns:
            Dictionary with matching statistics
        """
        processed_count = len(self._processed_codes)
        return {
            "original_secondary_count": self._original_count,
            "processed_secondary_count": processed_count,
            "unprocessed_secondary_count": self._original_count - processed_count,
            "secondary_match_rate": (processed_count / max(self._original_count, 1)) * 100,
            "total_lookups_matched": len(self._match_history),
        }
