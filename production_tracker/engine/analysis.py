"""
Assembly Analysis - Full budget/hours/productivity row per WBS code.

Combines aggregation, the progress model, earned value and the ECAC
forecast into the rows the reviewer and closeout screens display.
Everything here is a pure function of a ProjectSnapshot.

PM overrides, when present, replace the raw field quantity and hours
for every derived figure. The raw totals are still reported alongside.
"""
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from production_tracker.domain.entities import (
    Assembly,
    ClaimingSchema,
    EventSource,
    PmOverride,
    ProductionEvent,
    ProjectSnapshot,
    TrueUpStatus,
)
from .aggregation import EventTotals, aggregate_events, events_for_code
from .earned_value import (
    PerformanceStatus,
    calc_earned_hours,
    calc_performance_factor,
    classify_status,
)
from .forecast import (
    ECACResult,
    ReverseRateResult,
    calc_final_production_rate,
    calc_inline_ecac,
    calc_reverse_rate,
)
from .policy import DEFAULT_POLICY, Policy
from .progress import calc_percent_complete
from .staleness import is_claiming_stale

# Review cards are worked most-urgent first
STATUS_ORDER = {
    TrueUpStatus.FLAGGED: 0,
    TrueUpStatus.PENDING: 1,
    TrueUpStatus.ADJUSTED: 2,
    TrueUpStatus.ACCEPTED: 3,
}

# Sort key for codes with no hours, so they land after every real PF
NO_DATA_PF = 999.0


def effective_totals(totals: EventTotals, override: Optional[PmOverride]) -> Tuple[float, float]:
    """(qty, hours) after applying a PM override to raw totals."""
    if override is None:
        return totals.total_qty, totals.total_hours
    return override.validated_qty, override.validated_hours


# =============================================================================
# Assembly analysis
# =============================================================================

@dataclass(frozen=True)
class AssemblyAnalysis:
    """Budget vs. actual metrics for one assembly."""

    wbs_code: str
    description: str
    uom: str
    # Quantity
    budgeted_qty: float
    actual_qty: float
    qty_variance: float
    qty_pct_complete: float
    # Hours
    budgeted_hours: float
    earned_hours: float
    actual_hours: float
    hour_differential: float
    # Cost
    budgeted_cost: float
    actual_cost: float
    cost_variance: float
    cost_variance_pct: float
    # Performance
    performance_factor: float
    status: PerformanceStatus

    def to_dict(self) -> dict:
        return {
            'wbs_code': self.wbs_code,
            'description': self.description,
            'uom': self.uom,
            'budgeted_qty': self.budgeted_qty,
            'actual_qty': self.actual_qty,
            'qty_variance': self.qty_variance,
            'qty_pct_complete': self.qty_pct_complete,
            'budgeted_hours': self.budgeted_hours,
            'earned_hours': self.earned_hours,
            'actual_hours': self.actual_hours,
            'hour_differential': self.hour_differential,
            'budgeted_cost': self.budgeted_cost,
            'actual_cost': self.actual_cost,
            'cost_variance': self.cost_variance,
            'cost_variance_pct': self.cost_variance_pct,
            'performance_factor': self.performance_factor,
            'status': self.status.value,
        }


def calc_assembly_analysis(
    assembly: Assembly,
    events: Sequence[ProductionEvent],
    override: Optional[PmOverride] = None,
    schema: Optional[ClaimingSchema] = None,
    policy: Policy = DEFAULT_POLICY,
) -> AssemblyAnalysis:
    """
    Compute all budget/hours/productivity metrics for one assembly.

    Args:
        assembly: Assembly to analyse
        events: Production events in chronological order
        override: PM override for the code, if any
        schema: Claiming schema the assembly is tracked by, if any
        policy: Status thresholds

    Returns:
        AssemblyAnalysis (qty_pct_complete is in percent, 0-100)
    """
    totals = aggregate_events(events, assembly.wbs_code)
    actual_qty, actual_hours = effective_totals(totals, override)

    pct_complete = calc_percent_complete(assembly, events, schema, actual_qty)
    earned_hours = calc_earned_hours(assembly.budgeted_hours, pct_complete)
    pf = calc_performance_factor(earned_hours, actual_hours)

    budgeted_cost = assembly.budgeted_cost
    actual_cost = actual_qty * assembly.blended_unit_cost
    cost_variance = actual_cost - budgeted_cost
    cost_variance_pct = cost_variance / budgeted_cost * 100 if budgeted_cost != 0 else 0.0

    return AssemblyAnalysis(
        wbs_code=assembly.wbs_code,
        description=assembly.description,
        uom=assembly.uom,
        budgeted_qty=assembly.budgeted_qty,
        actual_qty=actual_qty,
        qty_variance=actual_qty - assembly.budgeted_qty,
        qty_pct_complete=pct_complete * 100,
        budgeted_hours=assembly.budgeted_hours,
        earned_hours=earned_hours,
        actual_hours=actual_hours,
        # Positive: more hours burned than earned
        hour_differential=actual_hours - earned_hours,
        budgeted_cost=budgeted_cost,
        actual_cost=actual_cost,
        cost_variance=cost_variance,
        cost_variance_pct=cost_variance_pct,
        performance_factor=pf,
        status=classify_status(
            pf, actual_hours,
            on_track=policy.pf_on_track,
            at_risk=policy.pf_at_risk,
        ),
    )


def analyze_snapshot(
    snapshot: ProjectSnapshot,
    policy: Policy = DEFAULT_POLICY,
) -> List[AssemblyAnalysis]:
    """Analysis rows for every assembly in the snapshot."""
    return [
        calc_assembly_analysis(
            assembly,
            snapshot.production_events,
            override=snapshot.get_override(assembly.wbs_code),
            schema=snapshot.schema_for(assembly),
            policy=policy,
        )
        for assembly in snapshot.assemblies
    ]


# =============================================================================
# Reviewer true-up rows
# =============================================================================

@dataclass(frozen=True)
class DailyEntry:
    """One event as shown in a review card's daily breakdown."""

    date: str
    hours: float
    qty: float
    equip_hours: float
    source: EventSource
    note: str

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'hours': self.hours,
            'qty': self.qty,
            'equip_hours': self.equip_hours,
            'source': self.source.value,
            'note': self.note,
        }


@dataclass(frozen=True)
class ReviewRow:
    """
    Reviewer card for one provisional code.

    field_* are raw event totals; effective_* have the PM override
    applied and drive every derived figure.
    """

    assembly: Assembly
    field_qty: float
    field_hours: float
    field_equip_hours: float
    effective_qty: float
    effective_hours: float
    pct_complete: float
    earned_hours: float
    performance_factor: float
    performance_status: PerformanceStatus
    budgeted_cost: float
    projected_cost: float
    ecac: ECACResult
    ecac_variance: float
    status: TrueUpStatus
    stale: bool
    has_override: bool
    field_notes: List[Tuple[str, str]] = field(default_factory=list)
    daily_breakdown: List[DailyEntry] = field(default_factory=list)

    @property
    def wbs_code(self) -> str:
        return self.assembly.wbs_code

    @property
    def has_data(self) -> bool:
        return self.effective_hours > 0

    def to_dict(self) -> dict:
        return {
            'wbs_code': self.wbs_code,
            'description': self.assembly.description,
            'uom': self.assembly.uom,
            'field_qty': self.field_qty,
            'field_hours': self.field_hours,
            'field_equip_hours': self.field_equip_hours,
            'effective_qty': self.effective_qty,
            'effective_hours': self.effective_hours,
            'pct_complete': self.pct_complete,
            'earned_hours': self.earned_hours,
            'performance_factor': self.performance_factor,
            'performance_status': self.performance_status.value,
            'budgeted_cost': self.budgeted_cost,
            'projected_cost': self.projected_cost,
            'ecac': self.ecac.ecac,
            'ecac_variance': self.ecac_variance,
            'required_rate': self.ecac.required_rate,
            'current_rate': self.ecac.current_rate,
            'remaining_qty': self.ecac.remaining_qty,
            'status': self.status.value,
            'stale': self.stale,
            'has_override': self.has_override,
            'field_notes': [{'date': d, 'note': n} for d, n in self.field_notes],
            'daily_breakdown': [d.to_dict() for d in self.daily_breakdown],
        }


def build_review_row(
    snapshot: ProjectSnapshot,
    assembly: Assembly,
    policy: Policy = DEFAULT_POLICY,
) -> ReviewRow:
    """Compute the reviewer card for one assembly."""
    events = snapshot.production_events
    code_events = events_for_code(events, assembly.wbs_code)
    totals = aggregate_events(code_events, assembly.wbs_code)
    override = snapshot.get_override(assembly.wbs_code)
    effective_qty, effective_hours = effective_totals(totals, override)

    schema = snapshot.schema_for(assembly)
    pct_complete = calc_percent_complete(assembly, code_events, schema, effective_qty)
    stale = is_claiming_stale(code_events, assembly.wbs_code) if schema is not None else False

    earned_hours = calc_earned_hours(assembly.budgeted_hours, pct_complete)
    pf = calc_performance_factor(earned_hours, effective_hours)
    ecac = calc_inline_ecac(
        assembly.budgeted_qty,
        effective_qty,
        assembly.budgeted_hours,
        effective_hours,
        assembly.blended_unit_cost,
    )

    return ReviewRow(
        assembly=assembly,
        field_qty=totals.total_qty,
        field_hours=totals.total_hours,
        field_equip_hours=totals.total_equip_hours,
        effective_qty=effective_qty,
        effective_hours=effective_hours,
        pct_complete=pct_complete,
        earned_hours=earned_hours,
        performance_factor=pf,
        performance_status=classify_status(
            pf, effective_hours,
            on_track=policy.pf_on_track,
            at_risk=policy.pf_at_risk,
        ),
        budgeted_cost=assembly.budgeted_cost,
        projected_cost=effective_qty * assembly.blended_unit_cost,
        ecac=ecac,
        ecac_variance=ecac.ecac - assembly.budgeted_cost,
        status=snapshot.status_for(assembly.wbs_code),
        stale=stale,
        has_override=override is not None,
        field_notes=[(e.date, e.description) for e in code_events if e.has_note],
        daily_breakdown=[
            DailyEntry(
                date=e.date,
                hours=e.actual_hours,
                qty=e.actual_qty,
                equip_hours=e.equipment_hours,
                source=e.source,
                note=e.description,
            )
            for e in code_events
        ],
    )


def _review_sort_key(row: ReviewRow) -> Tuple[int, float]:
    pf = row.performance_factor if row.has_data else NO_DATA_PF
    return STATUS_ORDER[row.status], pf


def build_review_rows(
    snapshot: ProjectSnapshot,
    status_filter: Optional[Iterable[TrueUpStatus]] = None,
    policy: Policy = DEFAULT_POLICY,
) -> List[ReviewRow]:
    """
    Review cards for every provisional code, most urgent first.

    Sorted by status (flagged, pending, adjusted, accepted), then by
    PF ascending; codes with no hours sort last within their status.

    Args:
        snapshot: Project snapshot
        status_filter: Only keep rows whose status is in this set
        policy: Status thresholds
    """
    rows = [build_review_row(snapshot, a, policy) for a in snapshot.provisional_assemblies()]
    rows.sort(key=_review_sort_key)
    if status_filter is not None:
        wanted = set(status_filter)
        rows = [r for r in rows if r.status in wanted]
    return rows


@dataclass(frozen=True)
class ReviewSummary:
    """Totals across all review cards."""

    total_budget: float
    total_ecac: float
    ecac_variance: float
    overall_pf: float
    reviewed: int
    flagged: int
    total: int
    has_data: bool

    def to_dict(self) -> dict:
        return {
            'total_budget': self.total_budget,
            'total_ecac': self.total_ecac,
            'ecac_variance': self.ecac_variance,
            'overall_pf': self.overall_pf,
            'reviewed': self.reviewed,
            'flagged': self.flagged,
            'total': self.total,
            'has_data': self.has_data,
        }


def summarize_review(rows: Sequence[ReviewRow]) -> ReviewSummary:
    """Roll review cards up to project totals."""
    total_budget = sum(r.budgeted_cost for r in rows)
    total_ecac = sum(r.ecac.ecac for r in rows)
    total_earned = sum(r.earned_hours for r in rows)
    total_actual = sum(r.effective_hours for r in rows)

    return ReviewSummary(
        total_budget=total_budget,
        total_ecac=total_ecac,
        ecac_variance=total_ecac - total_budget,
        overall_pf=total_earned / total_actual if total_actual > 0 else 0.0,
        reviewed=sum(1 for r in rows if r.status != TrueUpStatus.PENDING),
        flagged=sum(1 for r in rows if r.status == TrueUpStatus.FLAGGED),
        total=len(rows),
        has_data=total_actual > 0,
    )


def calc_reverse_for_review(row: ReviewRow, target_ecac: float) -> Optional[ReverseRateResult]:
    """
    Reverse rate for a review card's target ECAC.

    Returns:
        None when the target is not a finite number or the code has
        no field quantity yet
    """
    if not math.isfinite(target_ecac) or row.field_qty <= 0:
        return None
    assembly = row.assembly
    return calc_reverse_rate(
        assembly.budgeted_qty,
        row.effective_qty,
        assembly.budgeted_hours,
        row.effective_hours,
        target_ecac,
        assembly.blended_unit_cost,
        actual_cost_to_date=row.effective_qty * assembly.blended_unit_cost,
    )


# =============================================================================
# Closeout
# =============================================================================

@dataclass(frozen=True)
class CloseoutRate:
    """Final vs. budgeted man-hours per unit for a provisional code."""

    wbs_code: str
    description: str
    uom: str
    budgeted_rate: float
    final_rate: float
    final_qty: float
    final_hours: float
    variance_pct: float
    is_pushed: bool

    @property
    def pushable(self) -> bool:
        return self.final_hours > 0 and not self.is_pushed

    def to_dict(self) -> dict:
        return {
            'wbs_code': self.wbs_code,
            'description': self.description,
            'uom': self.uom,
            'budgeted_rate': self.budgeted_rate,
            'final_rate': self.final_rate,
            'final_qty': self.final_qty,
            'final_hours': self.final_hours,
            'variance_pct': self.variance_pct,
            'is_pushed': self.is_pushed,
        }


def calc_closeout_rates(snapshot: ProjectSnapshot) -> List[CloseoutRate]:
    """
    Final production rates (MH/unit) for every provisional code.

    variance_pct is positive when the final rate used more hours per
    unit than the bid.
    """
    rates = []
    for assembly in snapshot.provisional_assemblies():
        totals = aggregate_events(snapshot.production_events, assembly.wbs_code)
        final_qty, final_hours = effective_totals(
            totals, snapshot.get_override(assembly.wbs_code)
        )
        final_rate = calc_final_production_rate(final_hours, final_qty)
        budgeted_rate = assembly.budgeted_hours_per_unit
        variance = (final_rate - budgeted_rate) / budgeted_rate * 100 if budgeted_rate > 0 else 0.0

        rates.append(CloseoutRate(
            wbs_code=assembly.wbs_code,
            description=assembly.description,
            uom=assembly.uom,
            budgeted_rate=budgeted_rate,
            final_rate=final_rate,
            final_qty=final_qty,
            final_hours=final_hours,
            variance_pct=variance,
            is_pushed=snapshot.is_pushed(assembly.wbs_code),
        ))
    return rates
