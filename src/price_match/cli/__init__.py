"""Console display for dealer price matching."""

from .price_display import PriceMatchDisplay

__all__ = ["PriceMatchDisplay"]
