"""
Tests for Amazon Shipping Cost Calculator

Run with: pytest carriers/amazon/tests/ -v
"""

import logging
from itertools import permutations

import polars as pl
import pytest

from shared.items import LineItem
from carriers.amazon.calculate_costs import (
    calculate_costs,
    supplement_shipments,
    summarize,
)
from carriers.amazon.data import AmazonSettings, FuelExtension, load_tables
from carriers.amazon.fuel import get_fuel_pct


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(scope="module")
def tables():
    return load_tables()


@pytest.fixture(scope="module")
def fuel_table(tables):
    return tables.fuel_table


@pytest.fixture
def no_fuel() -> AmazonSettings:
    """Zone 5 ("5+" group), no diesel price, no DAS."""
    return AmazonSettings(zone=5, diesel_price=0.0)


def _row(items, settings, tables=None) -> dict:
    return calculate_costs(items, settings, tables).row(0, named=True)


# =============================================================================
# TESTS: FUEL
# =============================================================================

class TestFuelPct:
    """Diesel table bands are min <= price < max."""

    @pytest.mark.parametrize("price,expected", [
        (3.00, 14.00),
        (3.10, 14.00),
        (3.2499, 14.00),
        (3.25, 14.25),
        (3.60, 14.50),
        (4.75, 15.75),
        (4.99, 15.75),
    ])
    def test_band_lookup(self, fuel_table, price, expected):
        assert get_fuel_pct(price, fuel_table) == expected

    @pytest.mark.parametrize("price,expected", [
        (5.00, 16.00),
        (5.24, 16.00),
        (5.25, 16.25),
        (6.10, 17.00),
    ])
    def test_above_table_extends_up(self, fuel_table, price, expected):
        assert get_fuel_pct(price, fuel_table) == expected

    @pytest.mark.parametrize("price,expected", [
        (2.99, 13.75),
        (2.75, 13.75),
        (2.74, 13.50),
        (1.00, 12.00),
    ])
    def test_below_table_extends_down(self, fuel_table, price, expected):
        assert get_fuel_pct(price, fuel_table) == expected

    def test_below_table_clamps_at_zero(self, fuel_table):
        steep = FuelExtension(increment_price=0.25, increment_pct=2.0)
        assert get_fuel_pct(0.50, fuel_table, steep) == 0.0

    @pytest.mark.parametrize("price", [0, 0.0, None])
    def test_missing_price_is_zero(self, fuel_table, price):
        assert get_fuel_pct(price, fuel_table) == 0.0

    def test_no_extension_rule_is_zero_outside_table(self, fuel_table):
        assert get_fuel_pct(6.00, fuel_table, None) == 0.0
        assert get_fuel_pct(3.60, fuel_table, None) == 14.50

    def test_non_positive_increment_is_zero_and_warns(self, fuel_table, caplog):
        with caplog.at_level(logging.WARNING, logger="carriers.amazon.fuel"):
            pct = get_fuel_pct(9.00, fuel_table, FuelExtension(increment_price=0.0))

        assert pct == 0.0
        assert "increment_price" in caplog.text

    def test_non_positive_increment_still_uses_table(self, fuel_table):
        assert get_fuel_pct(3.60, fuel_table, FuelExtension(increment_price=-0.25)) == 14.50


# =============================================================================
# TESTS: SUPPLEMENT SHIPMENTS
# =============================================================================

class TestSupplementShipments:
    """Tests for supplement_shipments function."""

    def test_resolves_fuel_and_zone_group(self, tables):
        settings = AmazonSettings(zone=3, diesel_price=3.60, das_tier="Remote Area")
        row = supplement_shipments([LineItem(40, 20, 15, 4.0)], settings, tables).row(0, named=True)

        assert row["fuel_pct"] == 14.50
        assert row["zone_group"] == "3-4"
        assert row["amount_nonstandard"] == 5.75
        assert row["das_amount"] == 14.50
        assert row["billable_weight_lbs"] == 9

    def test_diesel_price_column_prices_each_line(self, tables):
        items = pl.DataFrame({
            "length_cm": [40.0, 40.0, 40.0],
            "width_cm": [20.0, 20.0, 20.0],
            "height_cm": [15.0, 15.0, 15.0],
            "weight_kg": [4.0, 4.0, 4.0],
            "quantity": [1, 1, 1],
            "diesel_price": [3.10, 4.90, 3.10],
        })
        df = supplement_shipments(items, AmazonSettings(zone=2, diesel_price=3.60), tables)

        assert df["diesel_price"].to_list() == [3.10, 4.90, 3.10]
        assert df["fuel_pct"].to_list() == [14.00, 15.75, 14.00]
        assert df["line_no"].to_list() == [0, 1, 2]

    def test_bad_fuel_extension_does_not_fail_batch(self, tables):
        custom = tables._replace(fuel_extension=FuelExtension(increment_price=0.0))
        row = _row([LineItem(40, 20, 15, 4.0)], AmazonSettings(zone=2, diesel_price=9.00), custom)

        assert row["fuel_pct"] == 0.0
        assert row["cost_fuel"] == 0.0
        assert row["cost_per_package"] == 13.95

    def test_unmapped_zone_uses_default_group(self, tables, caplog):
        with caplog.at_level(logging.WARNING, logger="carriers.amazon.calculate_costs"):
            row = supplement_shipments(
                [LineItem(40, 20, 15, 4.0)], AmazonSettings(zone=9), tables
            ).row(0, named=True)

        assert row["zone_group"] == "5+"
        assert row["amount_ahs_weight"] == 46.00
        assert "zone group" in caplog.text


# =============================================================================
# TESTS: SURCHARGE CLASSIFICATION
# =============================================================================

class TestClassification:
    """ExtraHeavy > LargePkg > AHS-Wgt > AHS-Dim > NonStd > OK."""

    def test_small_package_is_ok(self, no_fuel, tables):
        row = _row([LineItem(40, 20, 15, 4.0)], no_fuel, tables)

        assert row["surcharge_type"] == "OK"
        assert row["cost_surcharge"] == 0.0

    def test_heavy_package_is_extra_heavy(self, no_fuel, tables):
        row = _row([LineItem(40, 20, 15, 70.0)], no_fuel, tables)

        assert row["surcharge_type"] == "ExtraHeavy"
        assert row["surcharge_reason"] == "weight 154.3 lb > 150 lb"
        assert row["cost_surcharge"] == 1875.00
        # No minimum, no scaling: 155 lbs looks up the 150 lb row
        assert row["billable_weight_lbs"] == 155
        assert row["cost_base_rate"] == 145.40

    def test_long_package_is_large_package(self, no_fuel, tables):
        row = _row([LineItem(250, 20, 15, 10.0)], no_fuel, tables)

        assert row["surcharge_type"] == "LargePkg"
        assert row["surcharge_reason"] == "longest side 99 in > 96 in"
        assert row["cost_surcharge"] == 245.00
        assert row["billable_weight_lbs"] == 90
        assert row["cost_base_rate"] == 91.40

    def test_heavy_package_is_ahs_weight(self, no_fuel, tables):
        row = _row([LineItem(130, 20, 15, 25.0)], no_fuel, tables)

        # Weight wins over the dimensional AHS variants
        assert row["surcharge_type"] == "AHS-Wgt"
        assert row["cost_surcharge"] == 46.00
        assert row["surcharge_ahs_length"] is False

    def test_girth_is_ahs_dim(self, no_fuel, tables):
        row = _row([LineItem(115, 50, 40, 5.0)], no_fuel, tables)

        # 46 + 2 x (20 + 16) = 118
        assert row["surcharge_type"] == "AHS-Dim"
        assert row["surcharge_reason"] == "length+girth 118 in > 105 in"
        assert row["cost_surcharge"] == 30.00

    def test_length_is_ahs_dim(self, no_fuel, tables):
        row = _row([LineItem(125, 20, 15, 5.0)], no_fuel, tables)

        assert row["surcharge_type"] == "AHS-Dim"
        assert row["surcharge_reason"] == "longest side 50 in > 47 in"
        assert row["surcharge_ahs_girth"] is False

    def test_long_side_is_nonstandard(self, no_fuel, tables):
        row = _row([LineItem(100, 20, 15, 5.0)], no_fuel, tables)

        assert row["surcharge_type"] == "NonStd"
        assert row["surcharge_reason"] == "longest side 40 in > 37 in"
        assert row["cost_surcharge"] == 6.50

    def test_amounts_follow_zone_group(self, tables):
        row = _row([LineItem(100, 20, 15, 5.0)], AmazonSettings(zone=2, diesel_price=0.0), tables)
        assert row["cost_surcharge"] == 5.25

    @pytest.mark.parametrize("dims", list(permutations((115, 50, 40))))
    def test_side_order_does_not_matter(self, dims, no_fuel, tables):
        row = _row([LineItem(*dims, 5.0)], no_fuel, tables)

        assert row["length_plus_girth"] == 118
        assert row["surcharge_type"] == "AHS-Dim"

    def test_exactly_one_classification_per_line(self, no_fuel, tables):
        items = [
            LineItem(40, 20, 15, 4.0),
            LineItem(40, 20, 15, 70.0),
            LineItem(250, 20, 15, 10.0),
            LineItem(130, 20, 15, 25.0),
            LineItem(115, 50, 40, 5.0),
            LineItem(100, 20, 15, 5.0),
        ]
        df = calculate_costs(items, no_fuel, tables)

        flags = [c for c in df.columns if c.startswith("surcharge_") and c not in (
            "surcharge_type", "surcharge_reason", "surcharge_das"
        )]
        triggered = df.select(pl.sum_horizontal([pl.col(f).cast(pl.Int64) for f in flags])).to_series()
        assert triggered.to_list() == [0, 1, 1, 1, 1, 1]
        assert df["surcharge_type"].to_list() == ["OK", "ExtraHeavy", "LargePkg", "AHS-Wgt", "AHS-Dim", "NonStd"]


# =============================================================================
# TESTS: RATES AND TOTALS
# =============================================================================

class TestCalculateCosts:
    """Tests for the calculate_costs entry point and summarize."""

    def test_fuel_from_diesel_price(self, tables):
        row = _row([LineItem(40, 20, 15, 4.0)], AmazonSettings(zone=2, diesel_price=3.60), tables)

        assert row["cost_base_rate"] == 13.95
        assert row["fuel_pct"] == 14.50
        assert row["cost_fuel"] == 2.02
        assert row["cost_rate_subtotal"] == 15.97
        assert row["cost_per_package"] == 15.97

    def test_half_cent_package_total_rounds_up(self, tables):
        # 34 lbs zone 5 = 41.00, fuel 14.5% -> 46.945 per package
        row = _row([LineItem(60, 40, 30, 12.0, quantity=3)], AmazonSettings(zone=5, diesel_price=3.60), tables)

        assert row["billable_weight_lbs"] == 34
        assert row["cost_base_rate"] == 41.00
        assert row["cost_per_package"] == 46.95

    def test_no_residential_charge(self, no_fuel, tables):
        row = _row([LineItem(40, 20, 15, 4.0)], no_fuel, tables)
        assert row["cost_residential"] == 0.0

    def test_das_is_flat(self, tables):
        settings = AmazonSettings(zone=2, diesel_price=0.0, das_tier="Extended Delivery Area")
        row = _row([LineItem(40, 20, 15, 4.0)], settings, tables)

        assert row["cost_das"] == 4.95
        assert row["cost_per_package"] == pytest.approx(13.95 + 4.95)

    def test_unknown_das_tier_charges_nothing(self, tables):
        row = _row([LineItem(40, 20, 15, 4.0)], AmazonSettings(zone=2, das_tier="Base"), tables)
        assert row["cost_das"] == 0.0

    def test_missing_rate_is_zero(self, tables, caplog):
        with caplog.at_level(logging.WARNING, logger="carriers.amazon.calculate_costs"):
            row = _row([LineItem(40, 20, 15, 4.0)], AmazonSettings(zone=1, diesel_price=0.0), tables)

        assert row["cost_base_rate"] == 0.0
        assert "no rate" in caplog.text

    def test_zero_quantity_kept_but_not_summed(self, tables):
        items = [
            LineItem(40, 20, 15, 4.0, quantity=4),
            LineItem(100, 20, 15, 5.0, quantity=0),
        ]
        df = calculate_costs(items, AmazonSettings(zone=2, diesel_price=0.0), tables)
        summary = summarize(df)

        assert df.height == 2
        assert df["included"].to_list() == [True, False]
        assert df["surcharge_type"][1] == "NonStd"
        assert summary["grand_total"] == 55.80
        assert summary["surcharge_subtotal"] == 0.0
        assert summary["residential_subtotal"] == 0.0
        assert summary["line_count"] == 1
        assert summary["package_count"] == 4

    def test_custom_tables(self, tables):
        custom = tables._replace(
            zone_groups=pl.DataFrame({"zone": [5], "zone_group": ["2"]}),
        )
        row = _row([LineItem(100, 20, 15, 5.0)], AmazonSettings(zone=5, diesel_price=0.0), custom)

        assert row["zone_group"] == "2"
        assert row["cost_surcharge"] == 5.25
