"""
Forecast Engine - Estimate Cost at Completion and reverse rate.

ECAC is quantity-cost based: actual cost to date plus remaining
quantity at the blended unit cost. The dollar forecast is therefore
decoupled from hour overruns; hours at the current pace are reported
separately as remaining_hours.

The reverse calculator inverts the forward model: given a target ECAC
it back-solves the production rate needed on the remaining scope.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ECACResult:
    """
    Code-level forecast.

    Attributes:
        ecac: Estimated cost at completion ($)
        required_rate: Units/hr needed to finish within the original hours
        current_rate: Observed units/hr (0 before any data)
        remaining_qty: Budgeted quantity not yet installed
        remaining_hours: Hours to finish at the current rate
    """

    ecac: float
    required_rate: float
    current_rate: float
    remaining_qty: float
    remaining_hours: float

    def to_dict(self) -> dict:
        return {
            'ecac': self.ecac,
            'required_rate': self.required_rate,
            'current_rate': self.current_rate,
            'remaining_qty': self.remaining_qty,
            'remaining_hours': self.remaining_hours,
        }


@dataclass(frozen=True)
class ReverseRateResult:
    """Rate implied by a target ECAC."""

    required_rate: float
    remaining_hours: float
    remaining_qty: float

    def to_dict(self) -> dict:
        return {
            'required_rate': self.required_rate,
            'remaining_hours': self.remaining_hours,
            'remaining_qty': self.remaining_qty,
        }


def calc_inline_ecac(
    budgeted_qty: float,
    actual_qty: float,
    budgeted_hours: float,
    actual_hours: float,
    blended_unit_cost: float,
) -> ECACResult:
    """
    Estimate Cost at Completion for one code.

    With no observed rate yet (no hours or no quantity), ECAC is the
    original budget and the required rate is the bid rate.

    Args:
        budgeted_qty: Bid quantity
        actual_qty: Installed quantity (raw or PM-validated)
        budgeted_hours: Bid hours
        actual_hours: Hours spent (raw or PM-validated)
        blended_unit_cost: $ per unit

    Returns:
        ECACResult
    """
    budgeted_cost = budgeted_qty * blended_unit_cost
    actual_cost_to_date = actual_qty * blended_unit_cost
    remaining_qty = max(0.0, budgeted_qty - actual_qty)

    if actual_hours == 0 or actual_qty == 0:
        bid_rate = budgeted_qty / budgeted_hours if budgeted_hours > 0 else 0.0
        return ECACResult(
            ecac=budgeted_cost,
            required_rate=bid_rate,
            current_rate=0.0,
            remaining_qty=remaining_qty,
            remaining_hours=budgeted_hours,
        )

    current_rate = actual_qty / actual_hours
    remaining_hours = remaining_qty / current_rate if current_rate > 0 else 0.0

    ecac = actual_cost_to_date + remaining_qty * blended_unit_cost

    # Pace needed to land inside the original hour budget
    budgeted_hours_remaining = max(0.0, budgeted_hours - actual_hours)
    required_rate = (
        remaining_qty / budgeted_hours_remaining if budgeted_hours_remaining > 0 else 0.0
    )

    return ECACResult(
        ecac=ecac,
        required_rate=required_rate,
        current_rate=current_rate,
        remaining_qty=remaining_qty,
        remaining_hours=remaining_hours,
    )


def calc_reverse_rate(
    budgeted_qty: float,
    actual_qty: float,
    budgeted_hours: float,
    actual_hours: float,
    target_ecac: float,
    blended_unit_cost: float,
    actual_cost_to_date: Optional[float] = None,
) -> ReverseRateResult:
    """
    Back-calculate the production rate needed to hit a target ECAC.

    remaining $ = target - cost to date; affordable units = remaining $ /
    unit cost; remaining hours = affordable units x bid hours per unit;
    required rate = remaining qty / remaining hours.

    Args:
        budgeted_qty: Bid quantity
        actual_qty: Installed quantity
        budgeted_hours: Bid hours
        actual_hours: Hours spent (kept for call symmetry with
            calc_inline_ecac; the inversion does not use it)
        target_ecac: Reviewer-entered ECAC in dollars
        blended_unit_cost: $ per unit
        actual_cost_to_date: Spent dollars; defaults to
            actual_qty x blended_unit_cost

    Returns:
        ReverseRateResult; required_rate is 0 when no hours are affordable
    """
    if actual_cost_to_date is None:
        actual_cost_to_date = actual_qty * blended_unit_cost

    remaining_qty = max(0.0, budgeted_qty - actual_qty)
    remaining_budget = max(0.0, target_ecac - actual_cost_to_date)
    remaining_units = remaining_budget / blended_unit_cost if blended_unit_cost > 0 else 0.0
    hours_per_unit = budgeted_hours / budgeted_qty if budgeted_qty > 0 else 0.0
    remaining_hours = remaining_units * hours_per_unit
    required_rate = remaining_qty / remaining_hours if remaining_hours > 0 else 0.0

    return ReverseRateResult(
        required_rate=required_rate,
        remaining_hours=remaining_hours,
        remaining_qty=remaining_qty,
    )


def calc_final_production_rate(total_hours: float, total_qty: float) -> float:
    """Final production rate for closeout, in man-hours per unit."""
    if total_qty == 0:
        return 0.0
    return total_hours / total_qty
