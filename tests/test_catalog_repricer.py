"""Tests for catalog repricing."""

import pytest

from price_match.core import CatalogRepricer, InMemoryPriceIndex
from price_match.validation import ColumnLayoutError

HEADER = ["Code", "Name", "Price", "Stock"]
ROWS = [
    ["0456", "Bolt", "1,00", "5"],
    ["X1", "Washer", "0,10", "100"],
    ["999", "Nut", "0,50", "7"],
]


@pytest.fixture
def repricer(config_manager):
    return CatalogRepricer(config_manager)


@pytest.fixture
def dealer_prices(make_record):
    return InMemoryPriceIndex(
        [
            make_record("456", 80.0, dealer_label="2", worst_price="100.00", worst_dealer_label="1"),
            make_record("X1", 2.5, dealer_label="1"),
        ]
    )


def test_new_price_inserted_after_price_column(repricer, dealer_prices):
    header, rows = repricer.reprice(
        HEADER, ROWS, price_index=3, code_index=0, dealer_prices=dealer_prices, percentage=10
    )

    assert header == ["Code", "Name", "Price", "New Price", "Stock"]
    assert rows[0] == ["0456", "Bolt", "1,00", "88.00", "5"]
    assert rows[1] == ["X1", "Washer", "0,10", "2.750", "100"]
    assert rows[2] == ["999", "Nut", "0,50", "N/A", "7"]


def test_price_position_past_end_appends(repricer, dealer_prices):
    header, rows = repricer.reprice(
        HEADER, ROWS, price_index=10, code_index=0, dealer_prices=dealer_prices
    )

    assert header[-1] == "New Price"
    assert rows[0][-1] == "80.00"


def test_dealer_and_additional_columns(repricer, dealer_prices):
    header, rows = repricer.reprice(
        HEADER,
        ROWS,
        price_index=3,
        code_index=0,
        dealer_prices=dealer_prices,
        percentage=10,
        include_dealer=True,
        include_additional_columns=True,
    )

    assert header[-4:] == ["Dealer Number", "Worst Price", "Worst Dealer Number", "Price Ratio"]
    assert rows[0][-4:] == ["2", "110.00", "1", "25%"]
    assert rows[1][-4:] == ["1", "N/A", "N/A", "N/A"]
    assert rows[2][-4:] == ["N/A", "N/A", "N/A", "N/A"]
    assert all(len(row) == len(header) for row in rows)


def test_short_rows_without_code(repricer, dealer_prices):
    _, rows = repricer.reprice(
        HEADER, [["0456"]], price_index=3, code_index=2, dealer_prices=dealer_prices
    )

    assert rows == [["0456", "N/A"]]


@pytest.mark.parametrize("price_index,code_index", [(-1, 0), (3, -2)])
def test_negative_positions_rejected(repricer, dealer_prices, price_index, code_index):
    with pytest.raises(ColumnLayoutError):
        repricer.reprice(
            HEADER, ROWS, price_index=price_index, code_index=code_index, dealer_prices=dealer_prices
        )
