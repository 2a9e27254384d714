"""Number formatting for rendered CSV values."""

from typing import Optional

from ..config import PriceMatchConfigManager


def format_price(value: float, decimals: int = 2) -> str:
    """
    Format a price with a fixed number of decimals.

    Examples:
        >>> format_price(80)
        '80.00'
        >>> format_price(1.23456, 3)
        '1.235'
    """
    return f"{value:.{decimals}f}"


def format_ratio(ratio: float) -> str:
    """
    Format a price spread as an integer percentage.

    Examples:
        >>> format_ratio(25.0)
        '25%'
        >>> format_ratio(4.4)
        '4%'
    """
    return f"{ratio:.0f}%"


def format_repriced(value: float, config_manager: PriceMatchConfigManager) -> str:
    """Format a catalog price, keeping extra precision for small values."""
    config = config_manager.config
    if value < config.small_price_threshold:
        return format_price(value, config.small_price_decimals)
    return format_price(value, config.price_decimals)


def format_optional_price(
    value: Optional[float], config_manager: PriceMatchConfigManager
) -> str:
    """Format a price or return the "not available" marker for None."""
    if value is None:
        return config_manager.na_marker
    return format_price(value, config_manager.config.price_decimals)
