"""Product code fallback matching across dealer files."""

import logging
from typing import Optional, TYPE_CHECKING

from ..models import PriceRecord

if TYPE_CHECKING:
    from ..core.price_index import PriceLookup

logger = logging.getLogger(__name__)


def zero_padding_variant(code: str) -> Optional[str]:
    """Get the leading-zero toggled form of a code.

    Dealer systems disagree on zero-padding, so "0123" and "123" are
    treated as the same product.

    Examples:
        >>> zero_padding_variant("0123")
        '123'
        >>> zero_padding_variant("123")
        '0123'
        >>> zero_padding_variant("7") is None
        True
    """
    if len(code) <= 1:
        return None
    if code.startswith("0"):
        return code[1:]
    return "0" + code


def code_variants(code: str, description: str = "") -> list[str]:
    """Get lookup candidates for a code in the order they are tried.

    Args:
        code: Product code from the primary file
        description: Description field, used as a replacement code

    Returns:
        Exact code, its zero-padding variant, then the description
    """
    variants = [code]

    padded = zero_padding_variant(code)
    if padded is not None:
        variants.append(padded)

    if description and description not in variants:
        variants.append(description)

    return variants


def resolve_code(
    code: str, description: str, lookup: "PriceLookup"
) -> tuple[Optional[PriceRecord], bool]:
    """Find the secondary record for a primary code.

    Tries the exact code, then the zero-padding variant, then the description
    as a manufacturer replacement code. The first hit wins.

    Returns:
        Tuple of (matched record or None, found flag)
    """
    if not code:
        return None, False

    for candidate in code_variants(code, description):
        record = lookup.get(candidate)
        if record is not None:
            if candidate != code:
                logger.debug(f"Resolved code '{code}' via fallback '{candidate}'")
            return record, True

    return None, False


def resolve_zero_padded(code: str, lookup: "PriceLookup") -> tuple[Optional[PriceRecord], bool]:
    """Find a record by exact code or its zero-padding variant only."""
    if not code:
        return None, False

    record = lookup.get(code)
    if record is None:
        padded = zero_padding_variant(code)
        if padded is not None:
            record = lookup.get(padded)

    return record, record is not None
