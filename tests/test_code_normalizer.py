"""Tests for product code fallback matching."""

from price_match.normalizers import (
    code_variants,
    resolve_code,
    resolve_zero_padded,
    zero_padding_variant,
)


def test_zero_padding_variant_toggles_leading_zero():
    assert zero_padding_variant("0123") == "123"
    assert zero_padding_variant("123") == "0123"
    assert zero_padding_variant("7") is None
    assert zero_padding_variant("") is None


def test_code_variants_order():
    assert code_variants("0123", "X9") == ["0123", "123", "X9"]
    assert code_variants("5") == ["5"]
    assert code_variants("123", "123") == ["123", "0123"]


class TestResolveCode:
    def test_exact_match_wins(self, make_index):
        lookup = make_index(("123", 1.0), ("0123", 2.0))

        record, found = resolve_code("123", "", lookup)

        assert found
        assert record.code == "123"
        assert record.price == 1.0

    def test_zero_padding_is_symmetric(self, make_index):
        padded_lookup = make_index(("0123", 5.0))
        plain_lookup = make_index(("123", 6.0))

        record, found = resolve_code("123", "", padded_lookup)
        assert found and record.code == "0123"

        record, found = resolve_code("0123", "", plain_lookup)
        assert found and record.code == "123"

    def test_description_used_as_replacement_code(self, make_index):
        lookup = make_index(("NEW-42", 9.0))

        record, found = resolve_code("OLD-42", "NEW-42", lookup)

        assert found
        assert record.code == "NEW-42"

    def test_not_found(self, make_index):
        record, found = resolve_code("999", "", make_index(("123", 1.0)))

        assert record is None
        assert not found

    def test_empty_code_never_matches(self, make_index):
        record, found = resolve_code("", "123", make_index(("123", 1.0)))

        assert record is None
        assert not found


def test_resolve_zero_padded_ignores_description(make_index):
    lookup = make_index(("0456", 80.0))

    record, found = resolve_zero_padded("456", lookup)
    assert found and record.code == "0456"

    record, found = resolve_zero_padded("", lookup)
    assert not found and record is None
