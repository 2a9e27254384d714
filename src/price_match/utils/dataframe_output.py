"""DataFrame and CSV output for reconciled price lists."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd


def create_output_dataframe(header: Sequence[str], rows: Sequence[Sequence[str]]) -> pd.DataFrame:
    """
    Build a string DataFrame from a rendered header and rows.

    Rows shorter than the header are padded with empty strings; catalog rows
    may be ragged, so longer rows widen the frame with unnamed columns.

    Args:
        header: Column headers
        rows: Rendered data rows

    Returns:
        DataFrame with one string column per header entry
    """
    width = max([len(header)] + [len(row) for row in rows])
    columns: List[str] = list(header) + [f"column_{i + 1}" for i in range(len(header), width)]

    padded = [list(row) + [""] * (width - len(row)) for row in rows]
    return pd.DataFrame(padded, columns=columns, dtype=str)


def dataframe_to_csv(df: pd.DataFrame, delimiter: str = ",") -> str:
    """Serialize a DataFrame to CSV text without the index."""
    return df.to_csv(index=False, sep=delimiter, lineterminator="\n")


def save_dataframe_to_csv(
    df: pd.DataFrame,
    output_path: Optional[Path] = None,
    filename: Optional[str] = None,
    delimiter: str = ",",
) -> Path:
    """
    Save DataFrame to a CSV file.

    Args:
        df: DataFrame to save
        output_path: Optional output directory path (defaults to csv_output/)
        filename: Optional filename (defaults to timestamp)
        delimiter: Field delimiter of the written file

    Returns:
        Path to saved CSV file
    """
    if output_path is None:
        output_path = Path("csv_output")

    output_path.mkdir(parents=True, exist_ok=True)

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"price_match_output_{timestamp}.csv"

    file_path = output_path / filename
    df.to_csv(file_path, index=False, sep=delimiter, encoding="utf-8")

    return file_path
