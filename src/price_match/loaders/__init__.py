"""Loaders for dealer price lists and catalogs."""

from .csv_record_reader import DealerCSVReader, ReadStatistics

__all__ = ["DealerCSVReader", "ReadStatistics"]
