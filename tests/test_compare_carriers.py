"""
Tests for the compare_carriers script

Run with: pytest tests/test_compare_carriers.py -v
"""

import argparse

import polars as pl
import pytest

from shared.scripts.compare_carriers import (
    build_settings,
    format_money,
    format_lines,
    load_items,
    main,
    run_carriers,
)


@pytest.fixture
def items_csv(tmp_path):
    path = tmp_path / "items.csv"
    path.write_text(
        "name,length_cm,width_cm,height_cm,weight_kg\n"
        "small,40,20,15,4.0\n"
        "dense,30,25,20,8.0\n"
    )
    return path


@pytest.fixture
def args() -> argparse.Namespace:
    return argparse.Namespace(
        zone=2,
        fuel_pct=0.0,
        residential=False,
        fedex_das="None",
        diesel=0.0,
        amazon_das="None",
        origin="kanto",
        destination="kansai",
        payment="cash",
        same_prefecture=False,
        cool="none",
        same_day=False,
        discount=["digital"],
    )


class TestFormatMoney:
    """Tests for format_money function."""

    @pytest.mark.parametrize("value,currency,expected", [
        (1234.5, "USD", "$1,234.50"),
        (0, "USD", "$0.00"),
        (3260, "JPY", "¥3,260"),
        (None, "JPY", "N/A"),
    ])
    def test_format(self, value, currency, expected):
        assert format_money(value, currency) == expected


class TestLoadItems:
    """Tests for load_items function."""

    def test_quantity_defaults_to_one(self, items_csv):
        df = load_items(items_csv)

        assert df["quantity"].to_list() == [1, 1]
        assert df["name"].to_list() == ["small", "dense"]


class TestRunCarriers:
    """Tests for build_settings and run_carriers."""

    def test_settings_per_carrier(self, args):
        settings = build_settings(args)

        assert settings["fedex"].zone == 2
        assert settings["amazon"].diesel_price == 0.0
        assert settings["yamato"].discounts == ("digital",)

    def test_selected_carriers_only(self, items_csv, args):
        results = run_carriers(load_items(items_csv), build_settings(args), ["fedex", "yamato"])

        assert list(results) == ["fedex", "yamato"]
        df, summary = results["yamato"]
        assert df.height == 2
        assert summary["package_count"] == 2
        assert summary["discount_subtotal"] == -120

    def test_all_carriers_by_default(self, items_csv, args):
        results = run_carriers(load_items(items_csv), build_settings(args))
        assert list(results) == ["fedex", "amazon", "yamato"]


class TestFormatLines:
    """Tests for format_lines function."""

    def test_cool_on_oversize_is_marked(self, tmp_path, args):
        path = tmp_path / "items.csv"
        path.write_text(
            "name,length_cm,width_cm,height_cm,weight_kg\n"
            "small,25,20,15,2.0\n"
            "large,60,40,30,12.0\n"
        )
        settings = build_settings(argparse.Namespace(**{**vars(args), "cool": "chilled"}))
        df, _ = run_carriers(load_items(path), settings, ["yamato"])["yamato"]

        small, large = format_lines("yamato", df)
        assert "cool not available" not in small
        assert "cool not available" in large

    def test_zero_quantity_is_marked(self, tmp_path, args):
        path = tmp_path / "items.csv"
        path.write_text(
            "name,length_cm,width_cm,height_cm,weight_kg,quantity\n"
            "skipped,25,20,15,2.0,0\n"
        )
        df, _ = run_carriers(load_items(path), build_settings(args), ["fedex"])["fedex"]

        assert "qty 0, not counted" in format_lines("fedex", df)[0]
        assert "cool not available" not in format_lines("fedex", df)[0]


class TestMain:
    """Tests for the command line entry point."""

    def test_prints_every_carrier(self, items_csv, capsys):
        main(["--items", str(items_csv)])
        out = capsys.readouterr().out

        assert "CARRIER COMPARISON" in out
        assert "FEDEX GROUND" in out
        assert "AMAZON SHIPPING" in out
        assert "YAMATO TA-Q-BIN" in out
        assert "GRAND TOTALS" in out
        assert "small" in out

    def test_carrier_subset(self, items_csv, capsys):
        main(["--items", str(items_csv), "--carriers", "yamato", "--destination", "okinawa"])
        out = capsys.readouterr().out

        assert "YAMATO TA-Q-BIN" in out
        assert "FEDEX GROUND" not in out
        assert "¥" in out

    def test_empty_items(self, tmp_path, capsys):
        path = tmp_path / "empty.csv"
        pl.DataFrame(schema={"length_cm": pl.Float64, "width_cm": pl.Float64,
                             "height_cm": pl.Float64, "weight_kg": pl.Float64}).write_csv(path)

        main(["--items", str(path)])
        assert "No line items found." in capsys.readouterr().out

    def test_unknown_carrier_rejected(self, items_csv):
        with pytest.raises(SystemExit):
            main(["--items", str(items_csv), "--carriers", "ups"])
