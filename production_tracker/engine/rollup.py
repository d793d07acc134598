"""
Component Rollup - Work-package backtracking and EAC projection.

An assembly's components are weighted by their share of the siblings'
budgeted hours. Component hours are not logged in the field, so each
component's "earned hours" is back-allocated from the parent's actual
hours:

    component_earned_hours = weight * parent_actual_hours

A second, independent figure, earned_value, measures physical progress
(progress % x component budgeted hours). The two are compared, never
merged.

Each component is projected forward at its inferred rate, then the
projections are summed back to the assembly.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from production_tracker.domain.entities import Assembly, WorkPackageComponent
from .policy import (
    DEFAULT_POLICY,
    RECOVERY_RATE_MULTIPLE,
    VARIANCE_AHEAD,
    VARIANCE_ON_TRACK,
    Policy,
)


class VarianceFlag(Enum):
    """Inferred rate against bid rate."""
    AHEAD = "ahead"
    ON_TRACK = "on_track"
    BEHIND = "behind"


# =============================================================================
# Individual calculations
# =============================================================================

def calc_weight(component_hours: float, total_hours: float) -> float:
    """Component weight = component budgeted hours / total budgeted hours."""
    if total_hours == 0:
        return 0.0
    return component_hours / total_hours


def component_weights(components: Sequence[WorkPackageComponent]) -> List[float]:
    """
    Weights of sibling components.

    Sums to 1.0 whenever the siblings' total budgeted hours is positive;
    otherwise every weight is 0.
    """
    total = sum(c.budgeted_hours for c in components)
    return [calc_weight(c.budgeted_hours, total) for c in components]


def calc_component_earned_hours(weight: float, parent_actual_hours: float) -> float:
    """Back-allocated hours: weight x parent actual hours."""
    return weight * parent_actual_hours


def calc_progress_percent(qty_installed: float, plan_qty: float) -> float:
    """Physical progress, qty_installed / plan_qty, capped at 1."""
    if plan_qty == 0:
        return 0.0
    return min(qty_installed / plan_qty, 1.0)


def calc_earned_value(progress_pct: float, component_budgeted_hours: float) -> float:
    """Earned value in hours = progress % x component budgeted hours."""
    return progress_pct * component_budgeted_hours


def calc_bid_rate(plan_qty: float, budgeted_hours: float) -> float:
    """Original bid rate in units per hour."""
    if budgeted_hours == 0:
        return 0.0
    return plan_qty / budgeted_hours


def calc_inferred_rate(qty_installed: float, earned_hours: float) -> float:
    """Inferred production rate = qty installed / back-allocated hours."""
    if earned_hours == 0:
        return 0.0
    return qty_installed / earned_hours


def calc_variance_flag(
    inferred_rate: float,
    bid_rate: float,
    ahead: float = VARIANCE_AHEAD,
    on_track: float = VARIANCE_ON_TRACK,
) -> VarianceFlag:
    """Flag a component as ahead, on track or behind its bid rate."""
    if bid_rate == 0:
        return VarianceFlag.ON_TRACK
    ratio = inferred_rate / bid_rate
    if ratio >= ahead:
        return VarianceFlag.AHEAD
    if ratio >= on_track:
        return VarianceFlag.ON_TRACK
    return VarianceFlag.BEHIND


def calc_variance_percent(inferred_rate: float, bid_rate: float) -> float:
    """Rate variance in percent: positive = faster than bid."""
    if bid_rate == 0:
        return 0.0
    return (inferred_rate - bid_rate) / bid_rate * 100


# =============================================================================
# Component analysis
# =============================================================================

@dataclass(frozen=True)
class ComponentAnalysis:
    """
    Per-component metrics.

    earned_hours is the back-allocated share of parent hours;
    earned_value is progress-based. Both are kept on purpose.
    """

    id: str
    name: str
    uom: str
    plan_qty: float
    budgeted_hours: float
    weight: float
    qty_installed: float
    progress_pct: float
    earned_hours: float
    earned_value: float
    bid_rate: float
    inferred_rate: float
    variance_flag: VarianceFlag
    variance_pct: float

    @property
    def weight_pct(self) -> float:
        return self.weight * 100

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'uom': self.uom,
            'plan_qty': self.plan_qty,
            'budgeted_hours': self.budgeted_hours,
            'weight': self.weight,
            'weight_pct': self.weight_pct,
            'qty_installed': self.qty_installed,
            'progress_pct': self.progress_pct,
            'earned_hours': self.earned_hours,
            'earned_value': self.earned_value,
            'bid_rate': self.bid_rate,
            'inferred_rate': self.inferred_rate,
            'variance_flag': self.variance_flag.value,
            'variance_pct': self.variance_pct,
        }


def analyze_components(
    assembly: Assembly,
    parent_actual_hours: float,
    policy: Policy = DEFAULT_POLICY,
) -> List[ComponentAnalysis]:
    """
    Roll up all per-component metrics for an assembly.

    Args:
        assembly: Assembly with components
        parent_actual_hours: Assembly actual hours (from aggregate_events
            or a PM override)
        policy: Variance thresholds

    Returns:
        One ComponentAnalysis per component, in component order
    """
    components = assembly.components
    weights = component_weights(components)

    analyses = []
    for comp, weight in zip(components, weights):
        progress_pct = calc_progress_percent(comp.qty_installed, comp.plan_qty)
        earned_hours = calc_component_earned_hours(weight, parent_actual_hours)
        bid_rate = calc_bid_rate(comp.plan_qty, comp.budgeted_hours)
        inferred_rate = calc_inferred_rate(comp.qty_installed, earned_hours)

        analyses.append(ComponentAnalysis(
            id=comp.id,
            name=comp.name,
            uom=comp.uom,
            plan_qty=comp.plan_qty,
            budgeted_hours=comp.budgeted_hours,
            weight=weight,
            qty_installed=comp.qty_installed,
            progress_pct=progress_pct,
            earned_hours=earned_hours,
            earned_value=calc_earned_value(progress_pct, comp.budgeted_hours),
            bid_rate=bid_rate,
            inferred_rate=inferred_rate,
            variance_flag=calc_variance_flag(
                inferred_rate, bid_rate,
                ahead=policy.variance_ahead,
                on_track=policy.variance_on_track,
            ),
            variance_pct=calc_variance_percent(inferred_rate, bid_rate),
        ))
    return analyses


# =============================================================================
# EAC projection
# =============================================================================

@dataclass(frozen=True)
class ComponentEAC:
    """Hours-at-completion projection for one component."""

    hours_at_completion: float
    projected_overrun_hrs: float
    recovery_rate: float
    can_recover: bool

    def to_dict(self) -> dict:
        return {
            'hours_at_completion': self.hours_at_completion,
            'projected_overrun_hrs': self.projected_overrun_hrs,
            'recovery_rate': self.recovery_rate,
            'can_recover': self.can_recover,
        }


@dataclass(frozen=True)
class ComponentProjection:
    """A component's analysis paired with its EAC."""

    analysis: ComponentAnalysis
    eac: ComponentEAC

    def to_dict(self) -> dict:
        return {**self.analysis.to_dict(), **self.eac.to_dict()}


@dataclass(frozen=True)
class AssemblyEAC:
    """
    Assembly-level rollup of component projections.

    Attributes:
        total_hours_at_completion: Sum of component hours at completion
        total_projected_overrun_hrs: Total minus assembly budgeted hours
        dollar_impact: Overrun hours x derived hourly rate
        weighted_progress: Sum of component progress x weight
        hourly_rate: unit cost x budgeted qty / budgeted hours
        components: Per-component projections
    """

    total_hours_at_completion: float
    total_projected_overrun_hrs: float
    dollar_impact: float
    weighted_progress: float
    hourly_rate: float
    components: List[ComponentProjection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'total_hours_at_completion': self.total_hours_at_completion,
            'total_projected_overrun_hrs': self.total_projected_overrun_hrs,
            'dollar_impact': self.dollar_impact,
            'weighted_progress': self.weighted_progress,
            'hourly_rate': self.hourly_rate,
            'components': [c.to_dict() for c in self.components],
        }


def calc_component_eac(
    analysis: ComponentAnalysis,
    recovery_multiple: float = RECOVERY_RATE_MULTIPLE,
) -> ComponentEAC:
    """
    Project one component to completion at its inferred rate.

    With nothing installed or no back-allocated hours, there is not
    enough data to diverge from plan: the component finishes on budget
    at the bid rate.
    """
    remaining_qty = max(0.0, analysis.plan_qty - analysis.qty_installed)

    if analysis.qty_installed == 0 or analysis.earned_hours == 0:
        return ComponentEAC(
            hours_at_completion=analysis.budgeted_hours,
            projected_overrun_hrs=0.0,
            recovery_rate=analysis.bid_rate,
            can_recover=True,
        )

    remaining_hours = (
        remaining_qty / analysis.inferred_rate if analysis.inferred_rate > 0 else 0.0
    )
    hours_at_completion = analysis.earned_hours + remaining_hours
    projected_overrun = hours_at_completion - analysis.budgeted_hours

    budget_hours_remaining = max(0.0, analysis.budgeted_hours - analysis.earned_hours)
    recovery_rate = (
        remaining_qty / budget_hours_remaining if budget_hours_remaining > 0 else 0.0
    )

    if analysis.bid_rate > 0:
        can_recover = recovery_rate < analysis.bid_rate * recovery_multiple
    else:
        can_recover = True

    return ComponentEAC(
        hours_at_completion=hours_at_completion,
        projected_overrun_hrs=projected_overrun,
        recovery_rate=recovery_rate,
        can_recover=can_recover,
    )


def calc_assembly_eac(
    assembly: Assembly,
    parent_actual_hours: float,
    policy: Policy = DEFAULT_POLICY,
) -> AssemblyEAC:
    """
    Assembly-level EAC rollup.

    Args:
        assembly: Assembly with components
        parent_actual_hours: Assembly actual hours
        policy: Variance and recovery thresholds

    Returns:
        AssemblyEAC
    """
    analyses = analyze_components(assembly, parent_actual_hours, policy)
    projections = [
        ComponentProjection(
            analysis=a,
            eac=calc_component_eac(a, policy.recovery_rate_multiple),
        )
        for a in analyses
    ]

    total_hours_at_completion = sum(p.eac.hours_at_completion for p in projections)
    total_overrun = total_hours_at_completion - assembly.budgeted_hours

    if assembly.budgeted_hours > 0:
        hourly_rate = assembly.blended_unit_cost * assembly.budgeted_qty / assembly.budgeted_hours
    else:
        hourly_rate = 0.0

    weighted_progress = sum(p.analysis.progress_pct * p.analysis.weight for p in projections)

    return AssemblyEAC(
        total_hours_at_completion=total_hours_at_completion,
        total_projected_overrun_hrs=total_overrun,
        dollar_impact=total_overrun * hourly_rate,
        weighted_progress=weighted_progress,
        hourly_rate=hourly_rate,
        components=projections,
    )
