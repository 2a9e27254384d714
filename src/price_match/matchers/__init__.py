"""Price selection matchers."""

from .best_price_matcher import BestPriceMatcher, PriceSelection

__all__ = ["BestPriceMatcher", "PriceSelection"]
