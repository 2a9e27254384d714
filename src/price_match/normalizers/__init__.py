"""Normalizers for dealer price data."""

from .price_normalizer import (
    ParsedPrice,
    UNPARSABLE_PRICE,
    clean_price_token,
    parse_price,
    parse_price_result,
)
from .code_normalizer import (
    code_variants,
    resolve_code,
    resolve_zero_padded,
    zero_padding_variant,
)

__all__ = [
    "ParsedPrice",
    "UNPARSABLE_PRICE",
    "clean_price_token",
    "parse_price",
    "parse_price_result",
    "code_variants",
    "resolve_code",
    "resolve_zero_padded",
    "zero_padding_variant",
]
