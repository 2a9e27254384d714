"""End-to-end tests for the matching engine and command line."""

import io

import pytest

from price_match.main import PriceMatchingEngine, main
from price_match.models import ColumnLayout, ReconciliationPolicy

PRIMARY = "Code;Price;Dealer\n0456;100,00;5\n0789;12,00;5\n111;7,00;5\n"
SECONDARY = "Code;Price\n456;80,00\n789;15,00\n222;3,00\n"


@pytest.fixture
def engine(config_manager):
    return PriceMatchingEngine(config_manager)


class TestCompareStreams:
    def test_compare_with_additional_columns(self, engine):
        policy = ReconciliationPolicy(explicit_dealer_number=3, include_additional_columns=True)

        output = engine.compare_streams(
            io.BytesIO(PRIMARY.encode()),
            ColumnLayout(),
            io.BytesIO(SECONDARY.encode()),
            ColumnLayout(),
            policy,
        )

        assert output.header == [
            "Code", "Best Price", "Dealer Number", "Worst Price", "Worst Dealer Number", "Price Ratio"
        ]
        assert output.rows == [
            ["0456", "80.00", "3", "100.00", "1", "25%"],
            ["0789", "12.00", "1", "15.00", "3", "25%"],
            ["111", "7.00", "1", "N/A", "N/A", "N/A"],
            ["222", "3.00", "3", "N/A", "N/A", "N/A"],
        ]
        assert output.statistics["matched_count"] == 2
        assert output.statistics["secondary_only_count"] == 1
        assert output.statistics["primary_read"]["records_created"] == 3

    def test_dealer_column_from_policy(self, engine):
        output = engine.compare_streams(
            io.BytesIO(PRIMARY.encode()),
            ColumnLayout(),
            io.BytesIO(SECONDARY.encode()),
            ColumnLayout(),
            ReconciliationPolicy(dealer_column=2),
        )

        assert output.rows[1] == ["0789", "12.00", "5"]

    def test_to_csv(self, engine):
        assert engine.to_csv(["Code", "Price"], [["1", "2.00"]]) == "Code,Price\n1,2.00\n"


def test_reprice_streams(engine):
    catalog = io.BytesIO(b"Code;Name;Price\n0456;Bolt;1,00\n")
    dealer = io.BytesIO(b"Code;Best Price\n456;80.00\n")

    output = engine.reprice_streams(
        catalog, ";", dealer, ColumnLayout(), price_index=3, code_index=0, percentage=50
    )

    assert output.header == ["Code", "Name", "Price", "New Price"]
    assert output.rows == [["0456", "Bolt", "1,00", "120.00"]]
    assert output.statistics["catalog_rows"] == 1


class TestCommandLine:
    def test_compare_command_writes_csv(self, tmp_path):
        primary = tmp_path / "dealer1.csv"
        secondary = tmp_path / "dealer2.csv"
        output = tmp_path / "result.csv"
        primary.write_text(PRIMARY, encoding="utf-8")
        secondary.write_text(SECONDARY, encoding="utf-8")

        exit_code = main(
            [
                "compare",
                "--primary-file", str(primary),
                "--secondary-file", str(secondary),
                "--dealer-number", "3",
                "--output", str(output),
            ]
        )

        assert exit_code == 0
        assert output.read_text(encoding="utf-8").splitlines() == [
            "Code,Best Price,Dealer Number",
            "0456,80.00,3",
            "0789,12.00,1",
            "111,7.00,1",
            "222,3.00,3",
        ]

    def test_reprice_command_writes_csv(self, tmp_path):
        catalog = tmp_path / "catalog.csv"
        dealer = tmp_path / "dealer.csv"
        output = tmp_path / "catalog_new.csv"
        catalog.write_text("Code;Price;Stock\n0456;1,00;4\n", encoding="utf-8")
        dealer.write_text("Code;Best Price;Dealer Number\n456;80.00;2\n", encoding="utf-8")

        exit_code = main(
            [
                "reprice",
                "--catalog-file", str(catalog),
                "--dealer-file", str(dealer),
                "--price-index", "2",
                "--dealer-label-index", "2",
                "--include-dealer",
                "--output", str(output),
            ]
        )

        assert exit_code == 0
        assert output.read_text(encoding="utf-8").splitlines() == [
            "Code,Price,New Price,Stock,Dealer Number",
            "0456,\"1,00\",80.00,4,2",
        ]

    def test_missing_file_fails(self, tmp_path):
        exit_code = main(
            [
                "compare",
                "--primary-file", str(tmp_path / "missing.csv"),
                "--secondary-file", str(tmp_path / "missing.csv"),
            ]
        )

        assert exit_code == 1

    def test_invalid_delimiter_fails(self, tmp_path):
        path = tmp_path / "dealer.csv"
        path.write_text("Code;Price\n", encoding="utf-8")

        exit_code = main(
            [
                "compare",
                "--primary-file", str(path),
                "--secondary-file", str(path),
                "--delimiter", ";;",
            ]
        )

        assert exit_code == 1

    def test_no_command_fails(self):
        assert main([]) == 1

    def test_show_rules(self):
        assert main(["--show-rules"]) == 0
