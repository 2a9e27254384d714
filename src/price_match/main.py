"""Main entry point for the dealer price matching system."""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .cli import PriceMatchDisplay
from .config import PriceMatchConfigManager
from .core import CatalogRepricer, Reconciler, summarize_rows
from .loaders import DealerCSVReader
from .loaders.csv_record_reader import Stream
from .matchers import BestPriceMatcher
from .models import ColumnLayout, ReconciliationPolicy, ReconciliationRow, DISABLED_COLUMN
from .utils import RowProjector, create_output_dataframe, dataframe_to_csv, save_dataframe_to_csv
from .validation import PriceMatchError

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationOutput:
    """Rendered result of one dealer comparison."""

    header: List[str]
    rows: List[List[str]]
    records: List[ReconciliationRow] = field(default_factory=list)
    statistics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RepricingOutput:
    """Rendered result of one catalog repricing."""

    header: List[str]
    rows: List[List[str]]
    statistics: Dict[str, Any] = field(default_factory=dict)


class PriceMatchingEngine:
    """Main dealer price matching engine.

    Takes already-opened streams and returns rows ready for CSV
    serialization. Every call builds its own readers and lookups.
    """

    def __init__(self, config_manager: Optional[PriceMatchConfigManager] = None):
        """Initialize price matching engine.

        Args:
            config_manager: Optional config manager. Creates default if None.
        """
        self.config_manager = config_manager or PriceMatchConfigManager()
        self.matcher = BestPriceMatcher(self.config_manager)
        self.reconciler = Reconciler(self.config_manager, self.matcher)
        self.repricer = CatalogRepricer(self.config_manager)

        logger.info("Initialized price matching engine")

    def compare_streams(
        self,
        primary_stream: Stream,
        primary_layout: ColumnLayout,
        secondary_stream: Stream,
        secondary_layout: ColumnLayout,
        policy: ReconciliationPolicy,
    ) -> ReconciliationOutput:
        """Compare two dealer price lists.

        Args:
            primary_stream: First dealer file, drives output order
            primary_layout: Column layout of the first dealer file
            secondary_stream: Second dealer file, used for lookups
            secondary_layout: Column layout of the second dealer file
            policy: Price selection policy

        Returns:
            ReconciliationOutput with header, rendered rows and statistics

        Raises:
            CSVReadError: If either stream cannot be read
        """
        if policy.uses_dealer_column and primary_layout.dealer_index != policy.dealer_column:
            primary_layout = primary_layout.model_copy(update={"dealer_index": policy.dealer_column})

        primary_reader = DealerCSVReader(self.config_manager, source_name="dealer 1 file")
        secondary_reader = DealerCSVReader(self.config_manager, source_name="dealer 2 file")

        primary_records = primary_reader.read_records(primary_stream, primary_layout)
        secondary_index = secondary_reader.read_record_map(secondary_stream, secondary_layout)

        records = self.reconciler.reconcile(primary_records, secondary_index, policy)

        projector = RowProjector.for_policy(policy, self.config_manager)
        secondary_label = self.config_manager.get_secondary_dealer_label(
            policy.explicit_dealer_number
        )

        statistics = summarize_rows(records, secondary_label)
        statistics["primary_read"] = primary_reader.statistics.as_dict()
        statistics["secondary_read"] = secondary_reader.statistics.as_dict()

        return ReconciliationOutput(
            header=projector.header(),
            rows=projector.render_all(records),
            records=records,
            statistics=statistics,
        )

    def reprice_streams(
        self,
        catalog_stream: Stream,
        catalog_delimiter: str,
        dealer_stream: Stream,
        dealer_layout: ColumnLayout,
        price_index: int,
        code_index: int,
        percentage: float = 0.0,
        include_dealer: bool = False,
        include_additional_columns: bool = False,
    ) -> RepricingOutput:
        """Insert marked-up dealer prices into a product catalog.

        Args:
            catalog_stream: The firm's product catalog
            catalog_delimiter: Field delimiter of the catalog
            dealer_stream: Dealer price list, usually an earlier comparison output
            dealer_layout: Column layout of the dealer price list
            price_index: 1-based position of the catalog's price column
            code_index: 0-based position of the catalog's code column
            percentage: Markup applied to dealer prices
            include_dealer: Append the dealer label column
            include_additional_columns: Append worst price, worst dealer and ratio

        Returns:
            RepricingOutput with header, rows and statistics
        """
        catalog_reader = DealerCSVReader(self.config_manager, source_name="catalog file")
        dealer_reader = DealerCSVReader(self.config_manager, source_name="dealer file")

        header, rows = catalog_reader.read_table(catalog_stream, catalog_delimiter)
        dealer_index = dealer_reader.read_record_map(dealer_stream, dealer_layout)

        repriced_header, repriced_rows = self.repricer.reprice(
            header,
            rows,
            price_index=price_index,
            code_index=code_index,
            dealer_prices=dealer_index,
            percentage=percentage,
            include_dealer=include_dealer,
            include_additional_columns=include_additional_columns,
        )

        return RepricingOutput(
            header=repriced_header,
            rows=repriced_rows,
            statistics={
                "catalog_rows": len(rows),
                "dealer_records": len(dealer_index),
                "catalog_read": catalog_reader.statistics.as_dict(),
                "dealer_read": dealer_reader.statistics.as_dict(),
            },
        )

    def to_csv(self, header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
        """Serialize rendered rows to CSV text with the configured delimiter."""
        df = create_output_dataframe(header, rows)
        return dataframe_to_csv(df, self.config_manager.get_output_delimiter())

    def save_csv(
        self, header: Sequence[str], rows: Sequence[Sequence[str]], output: Optional[Path] = None
    ) -> Path:
        """Write rendered rows to a CSV file.

        Args:
            header: Output header
            rows: Output rows
            output: Target file; a timestamped file under csv_output/ if None

        Returns:
            Path of the written file
        """
        df = create_output_dataframe(header, rows)
        delimiter = self.config_manager.get_output_delimiter()
        if output is None:
            return save_dataframe_to_csv(df, delimiter=delimiter)
        return save_dataframe_to_csv(
            df, output_path=output.parent, filename=output.name, delimiter=delimiter
        )


def setup_logging(log_level: str = "NONE") -> None:
    """Set up logging configuration for price matching.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, NONE)
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_level.upper() == "NONE":
        logging.getLogger().setLevel(logging.CRITICAL + 1)  # Higher than CRITICAL
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _optional_dealer_number(value: Optional[int]) -> Optional[int]:
    # 0 means "not set", as in the upload form
    return value if value else None


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(description="Dealer Price Matching System")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "NONE"],
        default="NONE",
        help="Set logging level",
    )
    parser.add_argument(
        "--show-rules",
        action="store_true",
        help="Display information about the price selection rule and exit",
    )
    subparsers = parser.add_subparsers(dest="command")

    compare = subparsers.add_parser("compare", help="Compare two dealer price lists")
    compare.add_argument("--primary-file", type=Path, required=True, help="First dealer CSV file")
    compare.add_argument("--secondary-file", type=Path, required=True, help="Second dealer CSV file")
    compare.add_argument("--delimiter", default=";", help="Field delimiter of both files (default: ';')")
    compare.add_argument("--primary-code-index", type=int, default=0)
    compare.add_argument("--primary-price-index", type=int, default=1)
    compare.add_argument("--secondary-code-index", type=int, default=0)
    compare.add_argument("--secondary-price-index", type=int, default=1)
    compare.add_argument(
        "--dealer-column",
        type=int,
        default=DISABLED_COLUMN,
        help="Dealer label column of the first file (default: -1, label '1')",
    )
    compare.add_argument("--description-index", type=int, default=DISABLED_COLUMN)
    compare.add_argument("--weight-index", type=int, default=DISABLED_COLUMN)
    compare.add_argument(
        "--worst-price-index",
        type=int,
        default=DISABLED_COLUMN,
        help="Worst price column when the first file is an earlier comparison output",
    )
    compare.add_argument("--worst-dealer-index", type=int, default=DISABLED_COLUMN)
    compare.add_argument("--dealer-number", type=int, default=0, help="Label of the second dealer")
    compare.add_argument("--offset-percentage", type=float, default=None)
    compare.add_argument(
        "--additional-columns",
        action="store_true",
        help="Emit worst price, worst dealer and price ratio columns",
    )
    compare.add_argument("--output", type=Path, help="Output CSV file (default: csv_output/)")
    compare.add_argument("--show-rows", type=int, default=20, help="Rows to preview on screen")

    reprice = subparsers.add_parser("reprice", help="Insert dealer prices into the product catalog")
    reprice.add_argument("--catalog-file", type=Path, required=True, help="Product catalog CSV file")
    reprice.add_argument("--dealer-file", type=Path, required=True, help="Dealer price CSV file")
    reprice.add_argument("--delimiter", default=";", help="Field delimiter of both files (default: ';')")
    reprice.add_argument(
        "--price-index", type=int, required=True, help="1-based position of the catalog price column"
    )
    reprice.add_argument("--code-index", type=int, default=0, help="Catalog code column")
    reprice.add_argument("--percentage", type=float, default=0.0, help="Markup percentage")
    reprice.add_argument("--dealer-code-index", type=int, default=0)
    reprice.add_argument("--dealer-price-index", type=int, default=1)
    reprice.add_argument("--dealer-label-index", type=int, default=DISABLED_COLUMN)
    reprice.add_argument("--worst-price-index", type=int, default=DISABLED_COLUMN)
    reprice.add_argument("--worst-dealer-index", type=int, default=DISABLED_COLUMN)
    reprice.add_argument("--include-dealer", action="store_true", help="Append the dealer column")
    reprice.add_argument(
        "--additional-columns",
        action="store_true",
        help="Append worst price, worst dealer and price ratio columns",
    )
    reprice.add_argument("--output", type=Path, help="Output CSV file (default: csv_output/)")
    reprice.add_argument("--show-rows", type=int, default=20, help="Rows to preview on screen")

    return parser


def run_compare(engine: PriceMatchingEngine, display: PriceMatchDisplay, args: argparse.Namespace) -> int:
    """Run the compare command."""
    for path in (args.primary_file, args.secondary_file):
        if not path.exists():
            display.show_error(f"Dealer file not found at '{path}'")
            return 1

    primary_layout = ColumnLayout(
        delimiter=args.delimiter,
        code_index=args.primary_code_index,
        price_index=args.primary_price_index,
        dealer_index=args.dealer_column,
        description_index=args.description_index,
        weight_index=args.weight_index,
        worst_price_index=args.worst_price_index,
        worst_dealer_index=args.worst_dealer_index,
    )
    secondary_layout = ColumnLayout(
        delimiter=args.delimiter,
        code_index=args.secondary_code_index,
        price_index=args.secondary_price_index,
    )
    policy = ReconciliationPolicy(
        dealer_column=args.dealer_column,
        explicit_dealer_number=_optional_dealer_number(args.dealer_number),
        offset_percentage=args.offset_percentage,
        include_additional_columns=args.additional_columns,
        include_description=args.description_index >= 0,
        include_weight=args.weight_index >= 0,
    )

    with open(args.primary_file, "rb") as primary, open(args.secondary_file, "rb") as secondary:
        output = engine.compare_streams(primary, primary_layout, secondary, secondary_layout, policy)

    display.show_loading_summary(output.statistics["primary_read"], output.statistics["secondary_read"])
    display.show_reconciliation_results(output.statistics)
    display.show_output_preview(output.header, output.rows, args.show_rows)

    path = engine.save_csv(output.header, output.rows, args.output)
    display.show_saved_file(path)
    logger.info(f"Comparison completed. Total rows: {len(output.rows)}")
    return 0


def run_reprice(engine: PriceMatchingEngine, display: PriceMatchDisplay, args: argparse.Namespace) -> int:
    """Run the reprice command."""
    for path in (args.catalog_file, args.dealer_file):
        if not path.exists():
            display.show_error(f"File not found at '{path}'")
            return 1

    dealer_layout = ColumnLayout(
        delimiter=args.delimiter,
        code_index=args.dealer_code_index,
        price_index=args.dealer_price_index,
        dealer_index=args.dealer_label_index,
        worst_price_index=args.worst_price_index,
        worst_dealer_index=args.worst_dealer_index,
    )

    with open(args.catalog_file, "rb") as catalog, open(args.dealer_file, "rb") as dealer:
        output = engine.reprice_streams(
            catalog,
            args.delimiter,
            dealer,
            dealer_layout,
            price_index=args.price_index,
            code_index=args.code_index,
            percentage=args.percentage,
            include_dealer=args.include_dealer,
            include_additional_columns=args.additional_columns,
        )

    display.show_repricing_summary(output.statistics)
    display.show_output_preview(output.header, output.rows, args.show_rows)

    path = engine.save_csv(output.header, output.rows, args.output)
    display.show_saved_file(path)
    logger.info(f"Repricing completed. Total rows: {len(output.rows)}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the price matching system.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    display = PriceMatchDisplay()

    try:
        engine = PriceMatchingEngine()

        if args.show_rules:
            display.show_header()
            display.show_rule_info(engine.matcher.get_rule_info())
            return 0

        if args.command is None:
            parser.print_help()
            return 1

        display.show_header()
        if args.command == "compare":
            return run_compare(engine, display, args)
        return run_reprice(engine, display, args)

    except KeyboardInterrupt:
        logger.info("Matching process interrupted by user")
        return 1
    except (PriceMatchError, ValueError) as e:
        logger.error(f"Price matching failed: {e}")
        display.show_error(str(e))
        return 1
    except Exception as e:
        logger.exception("Unexpected error occurred")
        display.show_error(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
