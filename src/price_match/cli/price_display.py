from typing import List, Dict, Any, Optional, Sequence
from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box

# Display configuration constants
MAX_PREVIEW_ROWS = 20  # Default number of output rows to preview


class PriceMatchDisplay:
    """Rich console display for dealer price matching results."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize display with Rich console."""
        self.console = console or Console()

    def show_header(self) -> None:
        """Display price matching system header."""
        header = Text("Dealer Price Matching System", style="bold blue")
        subheader = Text("Best price reconciliation across dealer price lists", style="italic")

        self.console.print(Panel.fit(Group(header, subheader), border_style="blue"))

    def show_loading_summary(
        self, primary_stats: Dict[str, Any], secondary_stats: Dict[str, Any]
    ) -> None:
        """Display data loading summary for both dealer files.

        Args:
            primary_stats: Read statistics of the first dealer file
            secondary_stats: Read statistics of the second dealer file
        """
        table = Table(title="Loaded Files", box=box.ROUNDED)
        table.add_column("Metric", style="cyan")
        table.add_column("Dealer 1", justify="right")
        table.add_column("Dealer 2", justify="right")

        for label, key in (
            ("Data Rows", "data_rows"),
            ("Records", "records_created"),
            ("Skipped Rows", "skipped_rows"),
            ("Unparsable Prices", "unparsable_prices"),
        ):
            table.add_row(label, str(primary_stats.get(key, 0)), str(secondary_stats.get(key, 0)))

        self.console.print("\n")
        self.console.print(table)

    def show_reconciliation_results(self, statistics: Dict[str, Any]) -> None:
        """Display reconciliation statistics.

        Args:
            statistics: Output of summarize_rows plus secondary pool statistics
        """
        table = Table(title="Reconciliation Statistics", box=box.ROUNDED)
        table.add_column("Metric", style="cyan")
        table.add_column("Count", justify="right")

        table.add_row("Output Rows", str(statistics.get("total_rows", 0)))
        table.add_row("Matched Codes", str(statistics.get("matched_count", 0)))
        table.add_row("Dealer 1 Only", str(statistics.get("primary_only_count", 0)))
        table.add_row("Dealer 2 Only", str(statistics.get("secondary_only_count", 0)))
        table.add_row("Dealer 1 Wins", str(statistics.get("primary_wins", 0)))
        table.add_row("Dealer 2 Wins", str(statistics.get("secondary_wins", 0)))

        self.console.print("\n")
        self.console.print(table)

    def show_repricing_summary(self, statistics: Dict[str, Any]) -> None:
        """Display catalog repricing summary."""
        summary = (
            f"Repriced [bold green]{statistics.get('catalog_rows', 0)}[/bold green] catalog rows "
            f"using [bold green]{statistics.get('dealer_records', 0)}[/bold green] dealer prices"
        )
        self.console.print(summary)

    def show_output_preview(
        self, header: Sequence[str], rows: List[List[str]], limit: int = MAX_PREVIEW_ROWS
    ) -> None:
        """Show the first output rows."""
        if not rows:
            self.console.print("\n[yellow]No output rows produced.[/yellow]")
            return

        display_count = min(len(rows), limit)
        title = f"Output Rows ({len(rows)} total"
        if len(rows) > limit:
            title += f", showing first {display_count}"
        title += ")"

        table = Table(title=title, box=box.SIMPLE)
        for name in header:
            table.add_column(name or "-")

        for row in rows[:display_count]:
            table.add_row(*row[: len(header)])

        self.console.print("\n")
        self.console.print(table)

    def show_saved_file(self, path: Any) -> None:
        self.console.print(f"\n[green]Output written to {path}[/green]")

    def show_error(self, message: str) -> None:
        """Display error message.

        Args:
            message: Error message to display
        """
        self.console.print(f"\n[red]Error: {message}[/red]")

    def show_rule_info(self, rule_info: Dict[str, Any]) -> None:
        """Display information about the price selection rule."""
        table = Table(title=f"Rule: {rule_info.get('rule_name', 'Unknown')}", box=box.ROUNDED)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Rule Name", rule_info.get("rule_name", "Unknown"))
        table.add_row("Description", rule_info.get("description", "No description"))

        requirements = rule_info.get("requirements", [])
        if requirements:
            table.add_row("Requirements", "\n".join(f"• {req}" for req in requirements))

        self.console.print("\n")
        self.console.print(table)
