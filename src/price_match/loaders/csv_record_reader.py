"""CSV reader for dealer price lists and product catalogs."""

import csv
import logging
from dataclasses import dataclass
from typing import IO, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..config import PriceMatchConfigManager
from ..core.price_index import InMemoryPriceIndex
from ..models import ColumnLayout, PriceRecord
from ..normalizers import UNPARSABLE_PRICE, parse_price_result
from ..validation import CSVReadError

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"

Stream = Union[IO[bytes], IO[str]]


@dataclass
class ReadStatistics:
    """Counters collected while reading one file."""

    data_rows: int = 0
    records_created: int = 0
    skipped_rows: int = 0
    blank_rows: int = 0
    unparsable_prices: int = 0

    def as_dict(self) -> dict:
        return {
            "data_rows": self.data_rows,
            "records_created": self.records_created,
            "skipped_rows": self.skipped_rows,
            "blank_rows": self.blank_rows,
            "unparsable_prices": self.unparsable_prices,
        }


class DealerCSVReader:
    """Reads dealer price lists by column position.

    Dealer exports are rarely RFC-4180 compliant, so quote characters are
    removed before tokenizing. The first non-blank line is always treated as a header.
    A malformed row is skipped and counted; only an unreadable stream aborts
    the read.
    """

    def __init__(
        self,
        config_manager: Optional[PriceMatchConfigManager] = None,
        source_name: str = "dealer file",
    ):
        """Initialize the reader.

        Args:
            config_manager: Optional config manager. Creates default if None.
            source_name: Name of the file used in diagnostics
        """
        self.config_manager = config_manager or PriceMatchConfigManager()
        self.source_name = source_name
        self.encoding = self.config_manager.get_input_encoding()
        self.statistics = ReadStatistics()

    def read_records(self, stream: Stream, layout: ColumnLayout) -> List[PriceRecord]:
        """Read a dealer file into records, preserving file order.

        Args:
            stream: Readable binary or text stream
            layout: Column positions and delimiter

        Returns:
            List of normalized price records

        Raises:
            CSVReadError: If the stream cannot be read
        """
        content = self._read_content(stream).replace(b'"', b"")
        self.statistics = ReadStatistics()

        if layout.carries_upstream_worst:
            logger.info(
                f"{self.source_name}: reading upstream worst prices from column "
                f"{layout.worst_price_index}"
            )

        records = []
        for line_number, fields in self._iter_rows(content, layout.delimiter):
            record = self._create_record(fields, layout, line_number)
            if record is not None:
                records.append(record)

        self.statistics.records_created = len(records)
        self._log_statistics()
        return records

    def read_record_map(self, stream: Stream, layout: ColumnLayout) -> InMemoryPriceIndex:
        """Read a dealer file into a code-keyed lookup.

        Args:
            stream: Readable binary or text stream
            layout: Column positions and delimiter

        Returns:
            InMemoryPriceIndex over the file's records

        Raises:
            CSVReadError: If the stream cannot be read
        """
        index = InMemoryPriceIndex(self.read_records(stream, layout))

        if index.replaced_count:
            logger.info(
                f"{self.source_name}: {index.replaced_count} duplicate codes replaced by later rows"
            )
        return index

    def read_table(self, stream: Stream, delimiter: str) -> Tuple[List[str], List[List[str]]]:
        """Read a product catalog as raw header and rows.

        Catalog files keep standard CSV quoting.

        Args:
            stream: Readable binary or text stream
            delimiter: Field delimiter

        Returns:
            Tuple of (header, data rows)

        Raises:
            CSVReadError: If the stream cannot be read or has no header
        """
        content = self._read_content(stream)
        self.statistics = ReadStatistics()

        header: Optional[List[str]] = None
        rows: List[List[str]] = []
        for line_number, fields in self._iter_rows(content, delimiter, skip_header=False):
            if header is None:
                header = fields
                continue
            rows.append(fields)

        if header is None:
            raise CSVReadError("Catalog file has no header row", source=self.source_name)

        self.statistics.records_created = len(rows)
        self._log_statistics()
        return header, rows

    def _read_content(self, stream: Stream) -> bytes:
        """Read the whole stream into memory as bytes."""
        try:
            content = stream.read()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.source_name}: {e}")
            raise CSVReadError(f"Failed to read file: {e}", source=self.source_name) from e

        if isinstance(content, str):
            content = content.encode(self.encoding)

        if content.startswith(UTF8_BOM):
            content = content[len(UTF8_BOM):]

        return content

    def _iter_rows(
        self, content: bytes, delimiter: str, skip_header: bool = True
    ) -> Iterator[Tuple[int, List[str]]]:
        """Yield (line number, fields) for every usable line.

        The first non-blank line is the header. Undecodable and untokenizable
        lines are counted as skipped.
        """
        header_pending = skip_header
        for line_number, raw_line in enumerate(content.splitlines(), start=1):
            if not raw_line.strip():
                self.statistics.blank_rows += 1
                continue

            if header_pending:
                header_pending = False
                continue

            self.statistics.data_rows += 1

            try:
                line = raw_line.decode(self.encoding)
                fields = next(csv.reader([line], delimiter=delimiter))
            except (UnicodeDecodeError, csv.Error, StopIteration) as e:
                self._skip(line_number, f"{type(e).__name__}: {e}")
                continue

            yield line_number, fields

    def _create_record(
        self, fields: List[str], layout: ColumnLayout, line_number: int
    ) -> Optional[PriceRecord]:
        """Create a price record from tokenized fields.

        Args:
            fields: Tokenized row
            layout: Column positions
            line_number: 1-based line number for diagnostics

        Returns:
            PriceRecord or None if the row is malformed
        """
        if len(fields) < layout.required_width:
            self._skip(
                line_number,
                f"expected at least {layout.required_width} columns, found {len(fields)}",
            )
            return None

        parsed = parse_price_result(fields[layout.price_index])
        if not parsed.is_valid:
            self.statistics.unparsable_prices += 1
            logger.warning(
                f"{self.source_name} row {line_number}: unable to parse price "
                f"'{parsed.raw}', using {UNPARSABLE_PRICE}"
            )

        try:
            return PriceRecord(
                code=fields[layout.code_index],
                price=parsed.value_or(UNPARSABLE_PRICE),
                price_parsed=parsed.is_valid,
                dealer_label=self._optional_field(fields, layout.dealer_index) or "",
                description=self._optional_field(fields, layout.description_index) or "",
                weight=self._optional_field(fields, layout.weight_index) or "",
                worst_price=self._optional_field(fields, layout.worst_price_index),
                worst_dealer_label=self._optional_field(fields, layout.worst_dealer_index),
                row_number=line_number,
            )
        except ValidationError as e:
            self._skip(line_number, str(e))
            return None

    def _optional_field(self, fields: List[str], index: int) -> Optional[str]:
        """Get an optional column, None when disabled or out of range."""
        if index < 0 or index >= len(fields):
            return None
        return fields[index]

    def _skip(self, line_number: int, reason: str) -> None:
        self.statistics.skipped_rows += 1
        logger.warning(f"Skipping {self.source_name} row {line_number}: {reason}")

    def _log_statistics(self) -> None:
        stats = self.statistics
        logger.info(
            f"Read {self.source_name}: {stats.records_created} records from {stats.data_rows} rows, "
            f"{stats.skipped_rows} skipped, {stats.unparsable_prices} unparsable prices"
        )
