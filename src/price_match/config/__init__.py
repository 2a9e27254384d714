"""Configuration management for dealer price matching."""

from .config_manager import PriceMatchConfigManager, PriceMatchConfig

__all__ = ["PriceMatchConfigManager", "PriceMatchConfig"]
