"""Tests for configuration loading."""

import json

import pytest

from price_match.config import PriceMatchConfigManager


def test_default_config(config_manager):
    assert config_manager.na_marker == "N/A"
    assert config_manager.get_primary_dealer_label() == "1"
    assert config_manager.get_secondary_dealer_label() == "2"
    assert config_manager.get_output_delimiter() == ","
    assert config_manager.get_input_encoding() == "utf-8"
    assert config_manager.get_column_header("best_price") == "Best Price"


def test_explicit_dealer_number_overrides_label(config_manager):
    assert config_manager.get_secondary_dealer_label(3) == "3"
    assert config_manager.get_secondary_dealer_label(0) == "0"


def test_unknown_column_header_falls_back_to_name(config_manager):
    assert config_manager.get_column_header("surcharge") == "surcharge"


def test_custom_config_directory(tmp_path):
    (tmp_path / "output_config.json").write_text(
        json.dumps({"na_marker": "-", "output_delimiter": ";"}), encoding="utf-8"
    )

    manager = PriceMatchConfigManager(tmp_path)

    assert manager.na_marker == "-"
    assert manager.get_output_delimiter() == ";"
    assert manager.get_primary_dealer_label() == "1"


def test_reload_config(tmp_path):
    config_file = tmp_path / "output_config.json"
    config_file.write_text(json.dumps({"na_marker": "-"}), encoding="utf-8")
    manager = PriceMatchConfigManager(tmp_path)

    config_file.write_text(json.dumps({"na_marker": "n/a"}), encoding="utf-8")
    manager.reload_config()

    assert manager.na_marker == "n/a"


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PriceMatchConfigManager(tmp_path)


@pytest.mark.parametrize(
    "content", ["{not json", "[1, 2]", json.dumps({"output_delimiter": ";;"})]
)
def test_invalid_config(tmp_path, content):
    (tmp_path / "output_config.json").write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        PriceMatchConfigManager(tmp_path)
