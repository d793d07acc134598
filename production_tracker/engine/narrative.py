"""
Narratives - Plain-language summaries of component and assembly EAC.
"""
from production_tracker.domain.entities import Assembly
from .policy import NARRATIVE_TOLERANCE_HOURS
from .rollup import AssemblyEAC, ComponentAnalysis, VarianceFlag


def _fmt_number(value: float) -> str:
    """Render whole numbers without a trailing '.0'."""
    return f"{value:g}"


def generate_component_narrative(analysis: ComponentAnalysis, parent_actual_hours: float) -> str:
    """Human-readable narrative for a component's performance."""
    if analysis.qty_installed == 0 or parent_actual_hours == 0:
        return f"{analysis.name}: No progress recorded yet."

    uom = analysis.uom
    abs_pct = f"{abs(analysis.variance_pct):.0f}"
    if analysis.variance_flag == VarianceFlag.AHEAD:
        comparison = f"{abs_pct}% faster than bid"
    elif analysis.variance_flag == VarianceFlag.BEHIND:
        comparison = f"{abs_pct}% slower than bid"
    else:
        comparison = "on track with bid"

    return (
        f"{analysis.name} has earned {analysis.earned_hours:.2f} of the "
        f"{_fmt_number(parent_actual_hours)} parent hours. "
        f"At {analysis.progress_pct * 100:.0f}% progress on "
        f"{_fmt_number(analysis.plan_qty)} {uom} planned, "
        f"the inferred rate is {analysis.inferred_rate:.2f} {uom}/hr vs. "
        f"bid rate of {analysis.bid_rate:.2f} {uom}/hr: {comparison}."
    )


def generate_eac_narrative(
    eac: AssemblyEAC,
    assembly: Assembly,
    tolerance_hours: float = NARRATIVE_TOLERANCE_HOURS,
) -> str:
    """Assembly-level EAC narrative."""
    if eac.weighted_progress == 0:
        return (
            "No component progress recorded yet. "
            "EAC projections will appear once field data flows in."
        )

    overrun = eac.total_projected_overrun_hrs
    hrs = f"{abs(overrun):.1f}"
    dollars = f"${abs(eac.dollar_impact):,.0f}"
    at_completion = f"{eac.total_hours_at_completion:.1f}"
    budgeted = _fmt_number(assembly.budgeted_hours)

    if overrun > tolerance_hours:
        return (
            f"At current pace, this assembly will consume {at_completion} hrs "
            f"instead of the budgeted {budgeted}: "
            f"{hrs} hrs over budget ({dollars} impact)."
        )
    if overrun < -tolerance_hours:
        return (
            f"Tracking ahead of budget. Projected to finish in {at_completion} hrs "
            f"vs. {budgeted} budgeted, saving {hrs} hrs ({dollars})."
        )
    return f"On track. Projected {at_completion} hrs against {budgeted} budgeted."
