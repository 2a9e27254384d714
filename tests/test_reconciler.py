"""Tests for dealer price reconciliation."""

import pytest

from price_match.core import InMemoryPriceIndex, Reconciler, summarize_rows
from price_match.models import MatchStatus, ReconciliationPolicy
from price_match.utils import RowProjector


@pytest.fixture
def reconciler(config_manager):
    return Reconciler(config_manager)


def render(rows, policy, config_manager):
    return RowProjector.for_policy(policy, config_manager).render_all(rows)


class TestReconcile:
    def test_explicit_dealer_number_with_zero_padding(
        self, reconciler, config_manager, make_record, make_index
    ):
        policy = ReconciliationPolicy(explicit_dealer_number=3, include_additional_columns=True)

        rows = reconciler.reconcile(
            [make_record("0456", 100.0)], make_index(("456", 80.0)), policy
        )

        assert render(rows, policy, config_manager) == [
            ["0456", "80.00", "3", "100.00", "1", "25%"]
        ]

    def test_empty_secondary_renders_na(self, reconciler, config_manager, make_record):
        policy = ReconciliationPolicy(include_additional_columns=True)

        rows = reconciler.reconcile(
            [make_record("0456", 100.0)], InMemoryPriceIndex(), policy
        )

        assert rows[0].status == MatchStatus.PRIMARY_ONLY
        assert render(rows, policy, config_manager) == [
            ["0456", "100.00", "1", "N/A", "N/A", "N/A"]
        ]

    @pytest.mark.parametrize(
        "secondary_price,expected_dealer,expected_best",
        [(96.0, "1", 100.0), (95.0, "1", 100.0), (90.0, "2", 90.0)],
    )
    def test_offset_band(
        self, reconciler, make_record, make_index, secondary_price, expected_dealer, expected_best
    ):
        policy = ReconciliationPolicy(offset_percentage=5)

        rows = reconciler.reconcile(
            [make_record("A", 100.0)], make_index(("A", secondary_price)), policy
        )

        assert rows[0].dealer_label == expected_dealer
        assert rows[0].best_price == expected_best

    def test_offset_absorbed_reports_zero_spread(self, reconciler, make_record, make_index):
        policy = ReconciliationPolicy(offset_percentage=5, include_additional_columns=True)

        row = reconciler.reconcile([make_record("A", 100.0)], make_index(("A", 96.0)), policy)[0]

        assert row.worst_price == 100.0
        assert row.worst_dealer_label == "1"
        assert row.price_ratio == 0

    def test_secondary_only_codes_appended_once(self, reconciler, make_record, make_index):
        policy = ReconciliationPolicy()
        primary = [make_record("0123", 10.0), make_record("999", 5.0), make_record("999", 6.0)]
        secondary = make_index(("555", 7.0), ("123", 9.0), ("777", 3.0))

        rows = reconciler.reconcile(primary, secondary, policy)

        assert [r.code for r in rows] == ["0123", "999", "999", "555", "777"]
        appended = [r for r in rows if r.status == MatchStatus.SECONDARY_ONLY]
        assert [r.code for r in appended] == ["555", "777"]
        assert all(r.dealer_label == "2" for r in appended)
        assert rows[0].best_price == 9.0

    def test_secondary_only_rows_use_explicit_label(self, reconciler, make_index):
        policy = ReconciliationPolicy(explicit_dealer_number=4)

        rows = reconciler.reconcile([], make_index(("555", 7.0)), policy)

        assert rows[0].dealer_label == "4"
        assert rows[0].worst_price is None

    def test_swap_selects_same_best_price(self, reconciler, make_record, make_index):
        policy = ReconciliationPolicy()
        prices_a = {"A": 100.0, "B": 50.0, "C": 10.0}
        prices_b = {"A": 80.0, "B": 60.0, "C": 10.0}

        forward = reconciler.reconcile(
            [make_record(c, p) for c, p in prices_a.items()], make_index(*prices_b.items()), policy
        )
        backward = reconciler.reconcile(
            [make_record(c, p) for c, p in prices_b.items()], make_index(*prices_a.items()), policy
        )

        assert {r.code: r.best_price for r in forward} == {r.code: r.best_price for r in backward}

    def test_dealer_column_labels_primary(self, reconciler, make_record, make_index):
        policy = ReconciliationPolicy(dealer_column=2)
        primary = [
            make_record("A", 100.0, dealer_label="7"),
            make_record("B", 10.0, dealer_label=""),
        ]

        rows = reconciler.reconcile(primary, make_index(("A", 80.0), ("B", 20.0)), policy)

        assert rows[0].dealer_label == "2"
        assert rows[0].worst_dealer_label == "7"
        assert rows[1].dealer_label == "1"

    def test_description_replacement_code(self, reconciler, make_record, make_index):
        policy = ReconciliationPolicy()

        rows = reconciler.reconcile(
            [make_record("OLD-1", 10.0, description="NEW-1")], make_index(("NEW-1", 8.0)), policy
        )

        assert len(rows) == 1
        assert rows[0].best_price == 8.0

    def test_empty_primary_code_passes_through(self, reconciler, make_record, make_index):
        rows = reconciler.reconcile(
            [make_record("", 3.0)], make_index(("1", 1.0)), ReconciliationPolicy()
        )

        assert rows[0].status == MatchStatus.PRIMARY_ONLY
        assert rows[1].code == "1"

    def test_zero_best_price_has_no_ratio(
        self, reconciler, config_manager, make_record, make_index
    ):
        policy = ReconciliationPolicy(include_additional_columns=True)

        rows = reconciler.reconcile([make_record("A", 0.0)], make_index(("A", 5.0)), policy)

        assert render(rows, policy, config_manager) == [["A", "0.00", "1", "5.00", "2", "N/A"]]


class TestChainedWorstPrice:
    def test_upstream_worst_kept_when_lower(self, reconciler, make_record, make_index):
        primary = make_record("A", 100.0, dealer_label="1", worst_price="120,00", worst_dealer_label="3")

        row = reconciler.reconcile(
            [primary], make_index(("A", 130.0)), ReconciliationPolicy(dealer_column=2)
        )[0]

        assert row.best_price == 100.0
        assert row.worst_price == 120.0
        assert row.worst_dealer_label == "3"

    def test_new_price_replaces_higher_upstream_worst(self, reconciler, make_record, make_index):
        primary = make_record("A", 100.0, worst_price="120", worst_dealer_label="3")

        row = reconciler.reconcile([primary], make_index(("A", 110.0)), ReconciliationPolicy())[0]

        assert row.worst_price == 110.0
        assert row.worst_dealer_label == "2"

    def test_na_upstream_worst_ignored(self, reconciler, make_record, make_index):
        primary = make_record("A", 100.0, worst_price="N/A", worst_dealer_label="N/A")

        row = reconciler.reconcile([primary], make_index(("A", 150.0)), ReconciliationPolicy())[0]

        assert row.worst_price == 150.0
        assert row.worst_dealer_label == "2"


def test_summarize_rows(reconciler, make_record, make_index):
    rows = reconciler.reconcile(
        [make_record("A", 100.0), make_record("B", 5.0), make_record("C", 1.0)],
        make_index(("A", 80.0), ("B", 6.0), ("D", 2.0)),
        ReconciliationPolicy(),
    )

    assert summarize_rows(rows, "2") == {
        "total_rows": 4,
        "matched_count": 2,
        "primary_only_count": 1,
        "secondary_only_count": 1,
        "secondary_wins": 1,
        "primary_wins": 1,
    }


def test_secondary_only_optional_columns_render_na(reconciler, config_manager, make_record):
    policy = ReconciliationPolicy(
        include_description=True, include_weight=True, include_additional_columns=True
    )
    secondary = InMemoryPriceIndex([make_record("555", 7.0, description="Bolt", weight="0.2")])

    rows = reconciler.reconcile([], secondary, policy)

    assert render(rows, policy, config_manager) == [
        ["555", "7.00", "2", "N/A", "N/A", "N/A", "N/A", "N/A"]
    ]
