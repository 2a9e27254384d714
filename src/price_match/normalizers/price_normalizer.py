"""Locale tolerant price token parsing."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

UNPARSABLE_PRICE = 0.0

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ParsedPrice:
    """Outcome of parsing one raw price token.

    Attributes:
        raw: The token as it appeared in the file
        value: Parsed value, None when the token could not be parsed
    """

    raw: str
    value: Optional[float]

    @property
    def is_valid(self) -> bool:
        return self.value is not None

    def value_or(self, default: float = UNPARSABLE_PRICE) -> float:
        """Get the parsed value or a fallback for unparsable tokens."""
        return self.value if self.value is not None else default


def clean_price_token(raw: str) -> str:
    """Reduce a price token to plain digits with a single '.' decimal point.

    Handles ordinary and non-breaking spaces, thousands separators written as
    '.', ',' or repeated commas, and a comma used as the decimal separator.

    Examples:
        >>> clean_price_token("1 234,56")
        '1234.56'
        >>> clean_price_token("1.234,56")
        '1234.56'
        >>> clean_price_token("1,234,56")
        '1234.56'
    """
    cleaned = raw.replace("\u00a0", "").replace(" ", "")
    cleaned = "".join(cleaned.split())

    last_comma = cleaned.rfind(",")
    last_dot = cleaned.rfind(".")
    if last_comma >= 0 and last_dot >= 0:
        # The right-most separator is the decimal point
        if last_comma > last_dot:
            cleaned = cleaned.replace(".", "")
        else:
            cleaned = cleaned.replace(",", "")

    comma_count = cleaned.count(",")
    if comma_count > 1:
        cleaned = cleaned.replace(",", "", comma_count - 1)
    cleaned = cleaned.replace(",", ".")

    dot_count = cleaned.count(".")
    if dot_count > 1:
        cleaned = cleaned.replace(".", "", dot_count - 1)

    return cleaned


def parse_price_result(raw: Any) -> ParsedPrice:
    """Parse a raw price token into an explicit success or failure result.

    Args:
        raw: Raw value from a dealer file

    Returns:
        ParsedPrice with value None when the token is empty or not a number
    """
    raw_text = "" if raw is None else str(raw)
    cleaned = clean_price_token(raw_text)

    if not cleaned or not _NUMBER_PATTERN.fullmatch(cleaned):
        return ParsedPrice(raw=raw_text, value=None)

    return ParsedPrice(raw=raw_text, value=float(cleaned))


def parse_price(raw: Any) -> float:
    """Parse a raw price token, returning 0.0 when it cannot be parsed.

    A returned 0.0 is ambiguous between a free item and a parse failure;
    use parse_price_result when the difference matters.
    """
    result = parse_price_result(raw)
    if not result.is_valid:
        logger.warning(f"Unable to parse price value '{result.raw}', using {UNPARSABLE_PRICE}")
        return UNPARSABLE_PRICE

    logger.debug(f"Normalized price: '{result.raw}' -> '{result.value}'")
    return result.value_or()
