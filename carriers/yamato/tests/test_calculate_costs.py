"""
Tests for Yamato TA-Q-BIN Shipping Cost Calculator

Run with: pytest carriers/yamato/tests/ -v
"""

import logging
from itertools import permutations

import polars as pl
import pytest

from shared.items import LineItem
from carriers.yamato.calculate_costs import (
    calculate_costs,
    supplement_shipments,
    summarize,
)
from carriers.yamato.data import YamatoSettings, load_tables
from carriers.yamato.discounts import calc_discounts


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(scope="module")
def tables():
    return load_tables()


@pytest.fixture
def kanto_kansai() -> YamatoSettings:
    """Kanto -> Kansai, cash, no options."""
    return YamatoSettings(origin="kanto", destination="kansai", payment="cash")


@pytest.fixture
def size_60() -> LineItem:
    """25 + 20 + 15 = 60 cm, 2 kg."""
    return LineItem(25, 20, 15, 2.0, name="size 60")


def _row(items, settings, tables=None) -> dict:
    return calculate_costs(items, settings, tables).row(0, named=True)


# =============================================================================
# TESTS: SIZE CLASSIFICATION
# =============================================================================

class TestSizeClassification:
    """Applied size = max(sum tier, weight tier)."""

    def test_weight_tier_governs(self, kanto_kansai, tables):
        row = _row([LineItem(30, 25, 20, 8.0)], kanto_kansai, tables)

        assert row["three_side_sum_cm"] == 75
        assert row["sum_tier"] == 80
        assert row["weight_tier"] == 100
        assert row["applied_size"] == 100
        assert row["size_source"] == "weight"
        assert row["size_reason"] == "weight 8.0 kg -> size 100"

    def test_sum_tier_governs(self, kanto_kansai, tables):
        row = _row([LineItem(40, 30, 25, 3.0)], kanto_kansai, tables)

        assert row["sum_tier"] == 100
        assert row["weight_tier"] == 80
        assert row["applied_size"] == 100
        assert row["size_source"] == "sum"
        assert row["size_reason"] == "three-side sum 95 cm -> size 100"

    def test_tie_goes_to_sum(self, size_60, kanto_kansai, tables):
        row = _row([size_60], kanto_kansai, tables)

        assert row["sum_tier"] == row["weight_tier"] == 60
        assert row["size_source"] == "sum"

    def test_tier_edges_are_inclusive(self, kanto_kansai, tables):
        df = calculate_costs([
            LineItem(30, 30, 20, 2.0),
            LineItem(30, 30, 20.5, 2.0),
            LineItem(10, 10, 10, 5.0),
            LineItem(10, 10, 10, 5.1),
        ], kanto_kansai, tables)

        assert df["sum_tier"].to_list()[:2] == [80, 100]
        assert df["weight_tier"].to_list()[2:] == [80, 100]

    @pytest.mark.parametrize("item", [
        LineItem(20, 20, 10, 0.5),
        LineItem(30, 25, 20, 8.0),
        LineItem(60, 50, 40, 4.0),
        LineItem(80, 60, 50, 29.0),
        LineItem(15, 10, 5, 19.0),
    ])
    def test_applied_size_is_max_of_tiers(self, item, kanto_kansai, tables):
        row = _row([item], kanto_kansai, tables)

        assert row["applied_size"] >= row["sum_tier"]
        assert row["applied_size"] >= row["weight_tier"]
        assert row["applied_size"] == max(row["sum_tier"], row["weight_tier"])

    @pytest.mark.parametrize("dims", list(permutations((60, 35, 25))))
    def test_side_order_does_not_matter(self, dims, kanto_kansai, tables):
        row = _row([LineItem(*dims, 4.0)], kanto_kansai, tables)

        assert row["three_side_sum_cm"] == 120
        assert row["longest_side_cm"] == 60
        assert row["applied_size"] == 120


# =============================================================================
# TESTS: LIMITS
# =============================================================================

class TestLimits:
    """Packages beyond the limits get a size_error and cost nothing."""

    @pytest.mark.parametrize("item,reason", [
        (LineItem(180, 10, 10, 1.0), "longest side 180 cm > 170 cm"),
        (LineItem(100, 60, 50, 1.0), "three-side sum 210 cm > 200 cm"),
        (LineItem(30, 20, 10, 31.0), "weight 31.0 kg > 30 kg"),
        # Longest side is checked first
        (LineItem(175, 20, 10, 35.0), "longest side 175 cm > 170 cm"),
    ])
    def test_error_reason(self, item, reason, kanto_kansai, tables):
        row = _row([item], kanto_kansai, tables)

        assert row["size_error"] is True
        assert row["error_reason"] == reason

    def test_error_line_costs_nothing(self, kanto_kansai, tables):
        settings = kanto_kansai._replace(same_day=True, cool_type="chilled", discounts=("digital",))
        row = _row([LineItem(180, 10, 10, 1.0, quantity=2)], settings, tables)

        assert row["applied_size"] is None
        assert row["size_source"] is None
        assert row["cost_base_rate"] == 0
        assert row["cost_cool"] == 0
        assert row["cool_error"] is False
        assert row["cost_same_day"] == 0
        assert row["discount_total"] == 0
        assert row["discounts_applied"] == ""
        assert row["cost_per_package"] == 0
        assert row["cost_line_total"] == 0

    def test_at_limits_is_accepted(self, kanto_kansai, tables):
        row = _row([LineItem(170, 20, 10, 30.0)], kanto_kansai, tables)

        assert row["size_error"] is False
        assert row["error_reason"] is None
        assert row["applied_size"] == 200


# =============================================================================
# TESTS: RATES AND EXTRAS
# =============================================================================

class TestRates:
    """Base rate, cool, same-day and discounts."""

    def test_route_rate(self, kanto_kansai, tables):
        row = _row([LineItem(30, 25, 20, 8.0)], kanto_kansai, tables)

        assert row["is_intrapref"] is False
        assert row["cost_base_rate"] == 1650
        assert row["cost_per_package"] == 1650

    def test_cashless_rate(self, tables):
        settings = YamatoSettings(origin="hokkaido", destination="okinawa", payment="cashless")
        row = _row([LineItem(50, 40, 30, 5.0)], settings, tables)

        assert row["applied_size"] == 120
        assert row["cost_base_rate"] == 2920

    @pytest.mark.parametrize("payment,expected", [("cash", 1400), ("cashless", 1380)])
    def test_same_prefecture_uses_intrapref_table(self, payment, expected, tables):
        settings = YamatoSettings(origin="kanto", destination="kanto", payment=payment, same_prefecture=True)
        row = _row([LineItem(30, 25, 20, 8.0)], settings, tables)

        assert row["is_intrapref"] is True
        assert row["cost_base_rate"] == expected

    def test_okinawa_same_prefecture_uses_route_table(self, tables):
        settings = YamatoSettings(origin="okinawa", destination="okinawa", same_prefecture=True)
        row = _row([LineItem(30, 25, 20, 8.0)], settings, tables)

        assert row["is_intrapref"] is False
        assert row["cost_base_rate"] == 1470

    def test_missing_intrapref_size_falls_back_to_route(self, tables):
        custom = tables._replace(intrapref_rates=pl.DataFrame({
            "size": [60], "payment": ["cash"], "rate": [800],
        }))
        settings = YamatoSettings(origin="kanto", destination="kansai", same_prefecture=True)
        row = _row([LineItem(30, 25, 20, 8.0)], settings, custom)

        assert row["is_intrapref"] is False
        assert row["cost_base_rate"] == 1650

    def test_cool_fee(self, size_60, kanto_kansai, tables):
        row = _row([size_60], kanto_kansai._replace(cool_type="frozen"), tables)

        assert row["cool_error"] is False
        assert row["cost_cool"] == 275
        assert row["cost_per_package"] == 1060 + 275

    def test_cool_on_large_size_is_flagged(self, kanto_kansai, tables):
        row = _row([LineItem(50, 50, 40, 5.0)], kanto_kansai._replace(cool_type="chilled"), tables)

        assert row["applied_size"] == 140
        assert row["cool_error"] is True
        assert row["size_error"] is False
        assert row["cost_cool"] == 0
        assert row["cost_per_package"] == 2780

    def test_no_cool_requested(self, kanto_kansai, tables):
        row = _row([LineItem(50, 50, 40, 5.0)], kanto_kansai, tables)

        assert row["cool_error"] is False
        assert row["surcharge_cool"] is False

    def test_same_day_standard(self, size_60, kanto_kansai, tables):
        row = _row([size_60], kanto_kansai._replace(same_day=True), tables)

        assert row["cost_same_day"] == 550
        assert row["cost_per_package"] == 1060 + 550

    def test_same_day_okinawa(self, size_60, tables):
        settings = YamatoSettings(origin="kanto", destination="okinawa", same_day=True)
        row = _row([size_60], settings, tables)

        assert row["cost_base_rate"] == 1300
        assert row["cost_same_day"] == 330

    def test_discounts(self, size_60, kanto_kansai, tables):
        settings = kanto_kansai._replace(discounts=("dropoff", "digital"))
        row = _row([size_60], settings, tables)

        assert row["discount_total"] == -170
        assert row["discounts_applied"] == "dropoff,digital"
        assert row["cost_per_package"] == 1060 - 170

    def test_total_is_floored_at_zero(self, size_60, tables):
        custom = tables._replace(intrapref_rates=pl.DataFrame({
            "size": [60], "payment": ["cash"], "rate": [300],
        }))
        settings = YamatoSettings(
            origin="kanto", destination="kanto", same_prefecture=True,
            discounts=("member_dropoff", "digital", "multi_piece", "round_trip", "same_address"),
        )
        row = _row([size_60], settings, custom)

        assert row["discount_total"] == -470
        assert row["cost_per_package"] == 0

    def test_unknown_zone_rates_zero(self, size_60, tables, caplog):
        with caplog.at_level(logging.WARNING, logger="carriers.yamato"):
            row = _row([size_60], YamatoSettings(origin="mars", destination="kansai"), tables)

        assert row["cost_base_rate"] == 0
        assert "mars" in caplog.text


class TestCalcDiscounts:
    """member_dropoff replaces dropoff; everything else stacks."""

    @pytest.fixture
    def definitions(self, tables):
        return tables.discounts

    def test_stack(self, definitions):
        assert calc_discounts(["dropoff", "digital"], definitions) == (-170, ["dropoff", "digital"])

    def test_member_dropoff_replaces_dropoff(self, definitions):
        total, applied = calc_discounts(["member_dropoff", "dropoff", "digital"], definitions)

        assert total == -210
        assert applied == ["member_dropoff", "digital"]

    def test_order_does_not_matter(self, definitions):
        total, applied = calc_discounts(["dropoff", "digital", "member_dropoff"], definitions)

        assert total == -210
        assert "dropoff" not in applied

    def test_duplicates_count_once(self, definitions):
        assert calc_discounts(["digital", "digital"], definitions) == (-60, ["digital"])

    def test_unknown_key_ignored(self, definitions):
        assert calc_discounts(["coupon", "digital"], definitions) == (-60, ["digital"])

    def test_nothing_selected(self, definitions):
        assert calc_discounts([], definitions) == (0, [])


# =============================================================================
# TESTS: FULL PIPELINE
# =============================================================================

class TestCalculateCosts:
    """Tests for the calculate_costs entry point and summarize."""

    def test_supplement_adds_measurements(self, kanto_kansai, tables):
        row = supplement_shipments([LineItem(30, 25, 20, 8.0)], kanto_kansai, tables).row(0, named=True)

        assert row["three_side_sum_cm"] == 75
        assert row["longest_side_cm"] == 30
        assert row["cool_requested"] is False
        assert row["same_day_amount"] == 550

    def test_summary(self, kanto_kansai, tables):
        items = [
            LineItem(25, 20, 15, 2.0, quantity=2),
            LineItem(30, 25, 20, 8.0, quantity=1),
            LineItem(180, 10, 10, 1.0, quantity=3),
        ]
        settings = kanto_kansai._replace(discounts=("dropoff", "digital"))
        df = calculate_costs(items, settings, tables)
        summary = summarize(df)

        assert df["cost_line_total"].to_list() == [1780, 1480, 0]
        assert summary == {
            "grand_total": 3260,
            "base_subtotal": 3770,
            "cool_subtotal": 0,
            "same_day_subtotal": 0,
            "discount_subtotal": -510,
            "line_count": 3,
            "package_count": 6,
            "error_count": 1,
        }

    def test_zero_quantity_kept_but_not_summed(self, kanto_kansai, tables):
        items = [
            LineItem(25, 20, 15, 2.0, quantity=1),
            LineItem(30, 25, 20, 8.0, quantity=0),
            LineItem(180, 10, 10, 1.0, quantity=0),
        ]
        df = calculate_costs(items, kanto_kansai, tables)
        summary = summarize(df)

        assert df.height == 3
        assert df["included"].to_list() == [True, False, False]
        assert df["applied_size"][1] == 100
        assert summary["grand_total"] == 1060
        assert summary["line_count"] == 1
        assert summary["error_count"] == 0

    def test_money_is_whole_yen(self, size_60, kanto_kansai, tables):
        df = calculate_costs([size_60], kanto_kansai._replace(cool_type="chilled"), tables)

        for column in ["cost_base_rate", "cost_cool", "cost_same_day", "cost_per_package", "cost_line_total"]:
            assert df.schema[column] == pl.Int64
