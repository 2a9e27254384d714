"""Price match core components module."""

from .price_index import PriceLookup, InMemoryPriceIndex
from .dealer_pool import SecondaryDealerPool
from .reconciler import Reconciler, summarize_rows
from .catalog_repricer import CatalogRepricer

__all__ = [
    "PriceLookup",
    "InMemoryPriceIndex",
    "SecondaryDealerPool",
    "Reconciler",
    "summarize_rows",
    "CatalogRepricer",
]
