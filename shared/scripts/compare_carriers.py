"""
Compare Carriers
================

Runs one item list through every carrier calculator and prints per-line
results and batch totals side by side.

The items CSV needs length_cm, width_cm, height_cm and weight_kg columns;
quantity defaults to 1 and name is optional.

Usage:
    python -m shared.scripts.compare_carriers --items items.csv
    python -m shared.scripts.compare_carriers --items items.csv --zone 7 --fuel_pct 17.5 --residential
    python -m shared.scripts.compare_carriers --items items.csv --carriers yamato --origin kanto --destination okinawa --discount digital
"""

import argparse
import logging
from pathlib import Path

import polars as pl

from carriers import CALCULATORS
from carriers.fedex.data import DAS_TIERS as FEDEX_DAS_TIERS, DEFAULT_FUEL_PCT
from carriers.amazon.data import DAS_TIERS as AMAZON_DAS_TIERS, DEFAULT_DIESEL_PRICE
from carriers.yamato.data import COOL_TYPES, PAYMENT_METHODS


# =============================================================================
# CONFIGURATION
# =============================================================================

# Per-line columns shown for every carrier
LINE_COLUMNS = {
    "fedex": ["billable_weight_lbs", "surcharge_type", "cost_per_package", "cost_line_total"],
    "amazon": ["billable_weight_lbs", "surcharge_type", "cost_per_package", "cost_line_total"],
    "yamato": ["applied_size", "error_reason", "cost_per_package", "cost_line_total"],
}


# =============================================================================
# DATA LOADING
# =============================================================================

def load_items(path: Path) -> pl.DataFrame:
    """Load line items from CSV, defaulting quantity to 1."""
    df = pl.read_csv(path)
    if "quantity" not in df.columns:
        df = df.with_columns(pl.lit(1).alias("quantity"))
    return df


def build_settings(args: argparse.Namespace) -> dict:
    """Carrier name -> settings NamedTuple from the parsed arguments."""
    return {
        "fedex": CALCULATORS["fedex"].settings(
            zone=args.zone,
            fuel_pct=args.fuel_pct,
            residential=args.residential,
            das_tier=args.fedex_das,
        ),
        "amazon": CALCULATORS["amazon"].settings(
            zone=args.zone,
            diesel_price=args.diesel,
            das_tier=args.amazon_das,
        ),
        "yamato": CALCULATORS["yamato"].settings(
            origin=args.origin,
            destination=args.destination,
            payment=args.payment,
            same_prefecture=args.same_prefecture,
            cool_type=args.cool,
            same_day=args.same_day,
            discounts=tuple(args.discount),
        ),
    }


# =============================================================================
# CALCULATION
# =============================================================================

def run_carriers(items: pl.DataFrame, settings: dict, carriers: list[str] | None = None) -> dict:
    """
    Calculate every requested carrier.

    Returns:
        Carrier name -> (line DataFrame, summary dict)
    """
    results = {}
    for name in carriers or list(CALCULATORS):
        calc = CALCULATORS[name]
        df = calc.calculate_costs(items, settings.get(name))
        results[name] = (df, calc.summarize(df))
    return results


# =============================================================================
# FORMATTING
# =============================================================================

def format_money(value: float | int | None, currency: str) -> str:
    """Format an amount in the carrier's currency."""
    if value is None:
        return "N/A"
    if currency == "JPY":
        return f"¥{value:,.0f}"
    return f"${value:,.2f}"


def format_lines(name: str, df: pl.DataFrame) -> list[str]:
    """One text row per line item."""
    currency = CALCULATORS[name].currency
    rows = []
    for row in df.iter_rows(named=True):
        label = row["name"] or f"line {row['line_no'] + 1}"
        cells = []
        for column in LINE_COLUMNS[name]:
            value = row[column]
            if column.startswith("cost_"):
                cells.append(format_money(value, currency))
            elif value is not None:
                cells.append(str(value))
        marker = "" if row["included"] else "  (qty 0, not counted)"
        if row.get("cool_error"):
            marker += "  (cool not available for this size)"
        rows.append(f"  {label:<20} x{row['quantity']:<4} " + " | ".join(cells) + marker)
    return rows


def format_summary(name: str, summary: dict) -> list[str]:
    """Summary block for one carrier."""
    currency = CALCULATORS[name].currency
    lines = []
    for key, value in summary.items():
        if key in ("line_count", "package_count", "error_count"):
            lines.append(f"  {key:<22} {value:,}")
        else:
            lines.append(f"  {key:<22} {format_money(value, currency)}")
    return lines


# =============================================================================
# MAIN
# =============================================================================

def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Quote one item list with every carrier calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m shared.scripts.compare_carriers --items items.csv
  python -m shared.scripts.compare_carriers --items items.csv --zone 7 --fedex_das Remote
  python -m shared.scripts.compare_carriers --items items.csv --carriers fedex amazon --diesel 4.10
        """
    )

    parser.add_argument("--items", type=Path, required=True, help="Line items CSV")
    parser.add_argument(
        "--carriers",
        nargs="+",
        choices=list(CALCULATORS),
        default=list(CALCULATORS),
        help="Carriers to quote (default: all)"
    )

    # FedEx / Amazon
    parser.add_argument("--zone", type=int, default=5, help="US shipping zone 2-8 (default: 5)")
    parser.add_argument("--fuel_pct", type=float, default=DEFAULT_FUEL_PCT, help="FedEx fuel surcharge %%")
    parser.add_argument("--residential", action="store_true", help="FedEx residential delivery")
    parser.add_argument("--fedex_das", choices=FEDEX_DAS_TIERS, default="None", help="FedEx DAS tier")
    parser.add_argument("--diesel", type=float, default=DEFAULT_DIESEL_PRICE, help="Diesel $/gallon for Amazon fuel")
    parser.add_argument("--amazon_das", choices=AMAZON_DAS_TIERS, default="None", help="Amazon DAS tier")

    # Yamato
    parser.add_argument("--origin", default="kanto", help="Yamato origin zone id")
    parser.add_argument("--destination", default="kansai", help="Yamato destination zone id")
    parser.add_argument("--payment", choices=PAYMENT_METHODS, default="cash", help="Yamato payment method")
    parser.add_argument("--same_prefecture", action="store_true", help="Yamato intra-prefecture shipment")
    parser.add_argument("--cool", choices=COOL_TYPES, default="none", help="Yamato cool service")
    parser.add_argument("--same_day", action="store_true", help="Yamato same-day delivery")
    parser.add_argument(
        "--discount",
        action="append",
        default=[],
        help="Yamato discount key (repeatable)"
    )

    parser.add_argument("--verbose", action="store_true", help="Show calculator log messages")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("CARRIER COMPARISON")
    print("=" * 60)

    print(f"\nLoading items from {args.items}...")
    items = load_items(args.items)
    print(f"  Loaded {len(items):,} line items")

    if len(items) == 0:
        print("\nNo line items found.")
        return

    results = run_carriers(items, build_settings(args), args.carriers)

    for name, (df, summary) in results.items():
        print("\n" + "-" * 60)
        print(CALCULATORS[name].label.upper())
        print("-" * 60)
        for line in format_lines(name, df):
            print(line)
        print()
        for line in format_summary(name, summary):
            print(line)

    print("\n" + "=" * 60)
    print("GRAND TOTALS")
    print("=" * 60)
    for name, (_, summary) in results.items():
        calc = CALCULATORS[name]
        print(f"{calc.label:<20} {format_money(summary['grand_total'], calc.currency)}")
    print("=" * 60)


if __name__ == "__main__":
    main()
