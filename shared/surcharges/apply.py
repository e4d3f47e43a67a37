"""
Surcharge Application

Evaluates carrier surcharge rules against a supplemented shipment DataFrame.

Surcharges with the same exclusivity_group compete - only the highest
priority (lowest number) that matches wins. Surcharges without an
exclusivity_group are applied independently.

For every surcharge two columns are added:
    surcharge_<name>  - Boolean flag
    cost_<name>       - Amount (0.0 when not triggered)
"""

import polars as pl

from .base import Surcharge


OK_TYPE = "OK"
OK_REASON = "within all limits"


# =============================================================================
# HELPERS
# =============================================================================

def flag_column(surcharge: type[Surcharge]) -> str:
    return f"surcharge_{surcharge.name.lower()}"


def cost_column(surcharge: type[Surcharge]) -> str:
    return f"cost_{surcharge.name.lower()}"


def get_exclusivity_group(
    surcharges: list[type[Surcharge]],
    group: str
) -> list[type[Surcharge]]:
    """Get surcharges in an exclusivity group, sorted by priority (lowest first)."""
    return sorted(
        [s for s in surcharges if s.exclusivity_group == group],
        key=lambda s: s.priority
    )


def get_unique_exclusivity_groups(surcharges: list) -> list[str]:
    """Get exclusivity group names in first-seen order."""
    groups = []
    for s in surcharges:
        if s.exclusivity_group is not None and s.exclusivity_group not in groups:
            groups.append(s.exclusivity_group)
    return groups


def _cost_expr(surcharge: type[Surcharge]) -> pl.Expr:
    # cost() may return float or pl.Expr (for zone-resolved costs)
    cost_value = surcharge.cost()
    return cost_value if isinstance(cost_value, pl.Expr) else pl.lit(float(cost_value))


# =============================================================================
# APPLY
# =============================================================================

def apply_surcharges(df: pl.DataFrame, surcharges: list) -> pl.DataFrame:
    """
    Apply surcharges, handling mutual exclusivity within exclusivity groups.
    """
    standalone = [s for s in surcharges if s.exclusivity_group is None]
    exclusive = [s for s in surcharges if s.exclusivity_group is not None]

    for s in standalone:
        df = _apply_single_surcharge(df, s)

    for group_name in get_unique_exclusivity_groups(exclusive):
        df = _apply_exclusive_group(df, get_exclusivity_group(exclusive, group_name))

    return df


def _apply_single_surcharge(df: pl.DataFrame, surcharge) -> pl.DataFrame:
    """Apply a single surcharge without competition."""
    flag_col = flag_column(surcharge)

    df = df.with_columns(surcharge.conditions().fill_null(False).alias(flag_col))
    df = df.with_columns(
        pl.when(pl.col(flag_col))
        .then(_cost_expr(surcharge))
        .otherwise(pl.lit(0.0))
        .cast(pl.Float64)
        .alias(cost_column(surcharge))
    )

    return df


def _apply_exclusive_group(df: pl.DataFrame, group: list) -> pl.DataFrame:
    """
    Apply mutually exclusive surcharges within a group.

    Only the highest priority surcharge (lowest number) that matches wins.
    """
    exclusion_mask = pl.lit(False)

    for surcharge in group:
        flag_col = flag_column(surcharge)

        # Applies only if: conditions met AND no higher priority already matched
        applies = surcharge.conditions().fill_null(False) & ~exclusion_mask

        df = df.with_columns(applies.alias(flag_col))
        df = df.with_columns(
            pl.when(pl.col(flag_col))
            .then(_cost_expr(surcharge))
            .otherwise(pl.lit(0.0))
            .cast(pl.Float64)
            .alias(cost_column(surcharge))
        )

        exclusion_mask = exclusion_mask | pl.col(flag_col)

    return df


def classify(
    df: pl.DataFrame,
    group: list,
    type_col: str = "surcharge_type",
    reason_col: str = "surcharge_reason",
    cost_col: str | None = "cost_surcharge",
    default_type: str | None = OK_TYPE,
    default_reason: str | None = OK_REASON,
) -> pl.DataFrame:
    """
    Collapse the flags of an applied exclusivity group into one outcome.

    Adds columns (default names):
        - surcharge_type: label of the winning surcharge, or "OK"
        - surcharge_reason: why it triggered
        - cost_surcharge: amount of the winning surcharge (0.0 for OK),
          skipped when cost_col is None

    Expects apply_surcharges() to have run for the group.
    """
    type_expr = pl.lit(default_type, dtype=pl.Utf8)
    reason_expr = pl.lit(default_reason, dtype=pl.Utf8)

    # Build from lowest priority outwards so the highest priority is checked first
    for surcharge in reversed(group):
        flag = pl.col(flag_column(surcharge))
        type_expr = pl.when(flag).then(pl.lit(surcharge.type_name())).otherwise(type_expr)
        reason_expr = pl.when(flag).then(surcharge.reason()).otherwise(reason_expr)

    columns = [type_expr.alias(type_col), reason_expr.alias(reason_col)]
    if cost_col is not None:
        columns.append(pl.sum_horizontal([cost_column(s) for s in group]).alias(cost_col))

    return df.with_columns(columns)


def apply_min_billable_weights(
    df: pl.DataFrame,
    surcharges: list,
    weight_col: str = "billable_weight_lbs"
) -> pl.DataFrame:
    """
    Apply minimum billable weights from triggered surcharges.

    Some surcharges enforce minimum billable weights when triggered.
    """
    surcharges_with_min = [s for s in surcharges if s.min_billable_weight is not None]

    if not surcharges_with_min:
        return df

    # Sort by min_billable_weight descending (highest minimum first)
    surcharges_with_min.sort(key=lambda s: s.min_billable_weight, reverse=True)

    expr = pl.col(weight_col)
    for surcharge in reversed(surcharges_with_min):
        expr = (
            pl.when(pl.col(flag_column(surcharge)))
            .then(pl.max_horizontal(weight_col, pl.lit(surcharge.min_billable_weight)))
            .otherwise(expr)
        )

    return df.with_columns(expr.cast(pl.Int64).alias(weight_col))


# =============================================================================
# VALIDATION
# =============================================================================

def validate_surcharges(surcharges: list) -> None:
    """
    Validate surcharge configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    if not surcharges:
        return

    errors = []

    names = [s.name for s in surcharges]
    for name in sorted({n for n in names if names.count(n) > 1}):
        errors.append(f"{name}: duplicate surcharge name")

    for s in surcharges:
        if s.exclusivity_group is not None and s.priority is None:
            errors.append(f"{s.name}: exclusivity_group '{s.exclusivity_group}' requires priority")

        if s.min_billable_weight is not None and s.min_billable_weight < 1:
            errors.append(f"{s.name}: min_billable_weight must be >= 1")

    for group_name in get_unique_exclusivity_groups(surcharges):
        priorities = [s.priority for s in surcharges if s.exclusivity_group == group_name]
        if len(priorities) != len(set(priorities)):
            errors.append(f"exclusivity_group '{group_name}': priorities must be unique")

    if errors:
        raise ValueError("Surcharge configuration errors:\n  " + "\n  ".join(errors))
