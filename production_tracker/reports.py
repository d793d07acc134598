"""
Reports - Tabular views of engine results.

Each function turns engine rows into a pandas DataFrame for display or
export. An infinite performance factor cannot be rendered as a ratio,
so it becomes NaN in frames and is shown as '∞' by the pf_display
column.
"""
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from production_tracker.engine import (
    AssemblyAnalysis,
    AssemblyEAC,
    CloseoutRate,
    ReviewRow,
    format_performance_factor,
)

ANALYSIS_COLUMNS = [
    'wbs_code', 'description', 'uom',
    'budgeted_qty', 'actual_qty', 'qty_pct_complete',
    'budgeted_hours', 'earned_hours', 'actual_hours', 'hour_differential',
    'budgeted_cost', 'actual_cost', 'cost_variance', 'cost_variance_pct',
    'performance_factor', 'pf_display', 'status',
]

REVIEW_COLUMNS = [
    'wbs_code', 'description', 'status', 'field_qty', 'field_hours',
    'effective_qty', 'effective_hours', 'pct_complete', 'earned_hours',
    'performance_factor', 'pf_display', 'performance_status', 'stale',
    'budgeted_cost', 'ecac', 'ecac_variance', 'current_rate', 'required_rate',
]

COMPONENT_COLUMNS = [
    'id', 'name', 'uom', 'weight_pct', 'plan_qty', 'qty_installed', 'progress_pct',
    'budgeted_hours', 'earned_hours', 'earned_value', 'bid_rate', 'inferred_rate',
    'variance_flag', 'variance_pct', 'hours_at_completion', 'projected_overrun_hrs',
    'recovery_rate', 'can_recover',
]

CLOSEOUT_COLUMNS = [
    'wbs_code', 'description', 'uom', 'final_qty', 'final_hours',
    'budgeted_rate', 'final_rate', 'variance_pct', 'is_pushed',
]


def _with_pf_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Add the display column, then replace infinite PF with NaN."""
    if df.empty:
        df['pf_display'] = pd.Series(dtype=str)
        return df
    df['pf_display'] = df['performance_factor'].map(format_performance_factor)
    df['performance_factor'] = df['performance_factor'].replace([np.inf, -np.inf], np.nan)
    return df


def analysis_frame(rows: Sequence[AssemblyAnalysis]) -> pd.DataFrame:
    """One row per assembly analysis."""
    df = pd.DataFrame([r.to_dict() for r in rows], columns=[c for c in ANALYSIS_COLUMNS if c != 'pf_display'])
    df = _with_pf_columns(df)
    return df[ANALYSIS_COLUMNS]


def review_frame(rows: Sequence[ReviewRow]) -> pd.DataFrame:
    """One row per reviewer card (notes and daily breakdown omitted)."""
    df = pd.DataFrame([r.to_dict() for r in rows], columns=[c for c in REVIEW_COLUMNS if c != 'pf_display'])
    df = _with_pf_columns(df)
    return df[REVIEW_COLUMNS]


def component_frame(eac: AssemblyEAC) -> pd.DataFrame:
    """One row per component projection."""
    return pd.DataFrame([c.to_dict() for c in eac.components], columns=COMPONENT_COLUMNS)


def closeout_frame(rates: Sequence[CloseoutRate]) -> pd.DataFrame:
    """One row per provisional code's final production rate."""
    return pd.DataFrame([r.to_dict() for r in rates], columns=CLOSEOUT_COLUMNS)


def format_currency(amount: float, currency: Optional[dict] = None) -> str:
    """
    Format a dollar amount using the configured currency settings.

    Args:
        amount: Amount in dollars
        currency: Mapping with symbol, decimal_places, thousands_separator
    """
    currency = currency or {}
    symbol = currency.get("symbol", "$")
    places = int(currency.get("decimal_places", 2))
    separator = currency.get("thousands_separator", ",")

    text = f"{abs(amount):,.{places}f}"
    if separator != ",":
        text = text.replace(",", separator)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{text}"
