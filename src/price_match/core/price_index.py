"""Code-keyed lookup over a dealer price list."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Optional
import logging

from ..models import PriceRecord

logger = logging.getLogger(__name__)


class PriceLookup(ABC):
    """Read-only lookup of dealer records by product code.

    The reconciliation algorithm only depends on this interface, so an index
    that spills to disk can replace the in-memory one.
    """

    @abstractmethod
    def get(self, code: str) -> Optional[PriceRecord]:
        """Get the record stored under an exact code, or None."""

    @abstractmethod
    def records(self) -> Iterator[PriceRecord]:
        """Iterate over all records in source file order."""

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None

    def __iter__(self) -> Iterator[PriceRecord]:
        return self.records()


class InMemoryPriceIndex(PriceLookup):
    """Holds a whole dealer file in a dict keyed by product code.

    Memory use grows with the size of the file. Records with an empty code
    are never indexed. When a code repeats, the later row replaces the
    earlier one.
    """

    def __init__(self, records: Optional[Iterable[PriceRecord]] = None):
        self._records: Dict[str, PriceRecord] = {}
        self._replaced_count = 0

        for record in records or []:
            self.add(record)

    def add(self, record: PriceRecord) -> bool:
        """Add a record to the index.

        Returns:
            True if the record was indexed, False if it had no code
        """
        if not record.has_code:
            logger.debug(f"Not indexing record without code at row {record.row_number}")
            return False

        if record.code in self._records:
            self._replaced_count += 1
            logger.debug(
                f"Duplicate code '{record.code}' at row {record.row_number} replaces row "
                f"{self._records[record.code].row_number}"
            )

        self._records[record.code] = record
        return True

    def get(self, code: str) -> Optional[PriceRecord]:
        return self._records.get(code)

    def records(self) -> Iterator[PriceRecord]:
        return iter(list(self._records.values()))

    def codes(self) -> List[str]:
        return list(self._records.keys())

    @property
    def replaced_count(self) -> int:
        """Number of rows that were replaced by a later row with the same code."""
        return self._replaced_count

    def __len__(self) -> int:
        return len(self._records)
