"""Shared fixtures for price matching tests."""

import io

import pytest

from price_match.config import PriceMatchConfigManager
from price_match.core import InMemoryPriceIndex
from price_match.models import PriceRecord


@pytest.fixture
def config_manager():
    return PriceMatchConfigManager()


@pytest.fixture
def make_stream():
    """Build a binary stream from CSV lines."""

    def _make(*lines: str, newline: str = "\n") -> io.BytesIO:
        return io.BytesIO((newline.join(lines) + newline).encode("utf-8"))

    return _make


@pytest.fixture
def make_record():
    """Build a PriceRecord with sensible defaults."""

    def _make(code: str, price: float, **kwargs) -> PriceRecord:
        return PriceRecord(code=code, price=price, **kwargs)

    return _make


@pytest.fixture
def make_index(make_record):
    """Build an in-memory lookup from (code, price) pairs."""

    def _make(*pairs) -> InMemoryPriceIndex:
        return InMemoryPriceIndex(
            make_record(code, price, row_number=i + 2) for i, (code, price) in enumerate(pairs)
        )

    return _make
