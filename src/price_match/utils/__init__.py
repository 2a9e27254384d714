"""Output utilities for dealer price matching."""

from .formatting import format_price, format_ratio, format_repriced, format_optional_price
from .row_projector import OutputColumn, RowProjector, insert_column, COMPARISON_COLUMNS
from .dataframe_output import create_output_dataframe, dataframe_to_csv, save_dataframe_to_csv

__all__ = [
    "format_price",
    "format_ratio",
    "format_repriced",
    "format_optional_price",
    "OutputColumn",
    "RowProjector",
    "insert_column",
    "COMPARISON_COLUMNS",
    "create_output_dataframe",
    "dataframe_to_csv",
    "save_dataframe_to_csv",
]
