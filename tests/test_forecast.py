"""
Tests for ECAC, the reverse rate calculator and closeout rates.
"""
import pytest

from production_tracker.engine import (
    calc_final_production_rate,
    calc_inline_ecac,
    calc_reverse_rate,
)


class TestInlineECAC:
    """Tests for calc_inline_ecac."""

    def test_wall_forms_scenario(self):
        """580 SF at $10, 246 SF installed in 29.5 hrs."""
        result = calc_inline_ecac(580, 246, 80, 29.5, 10)

        assert result.current_rate == pytest.approx(8.339, abs=1e-3)
        assert result.remaining_qty == pytest.approx(334)
        assert result.ecac == pytest.approx(5800)
        assert result.required_rate == pytest.approx(334 / 50.5)
        assert result.remaining_hours == pytest.approx(334 / (246 / 29.5))

    def test_no_data_returns_budget(self):
        result = calc_inline_ecac(100, 0, 40, 0, 10)

        assert result.ecac == 1000
        assert result.required_rate == pytest.approx(2.5)
        assert result.current_rate == 0
        assert result.remaining_qty == 100
        assert result.remaining_hours == 40

    def test_hours_without_quantity_returns_budget(self):
        result = calc_inline_ecac(100, 0, 40, 12, 10)
        assert result.ecac == 1000
        assert result.current_rate == 0

    def test_zero_budget_hours_no_data(self):
        assert calc_inline_ecac(100, 0, 0, 0, 10).required_rate == 0

    def test_quantity_overrun(self):
        """Installing beyond budget costs the extra units; nothing remains."""
        result = calc_inline_ecac(100, 120, 40, 30, 10)

        assert result.remaining_qty == 0
        assert result.remaining_hours == 0
        assert result.ecac == pytest.approx(1200)
        assert result.required_rate == 0

    def test_hours_exhausted(self):
        result = calc_inline_ecac(100, 50, 40, 45, 10)
        assert result.required_rate == 0
        assert result.remaining_hours == pytest.approx(50 / (50 / 45))

    def test_ecac_independent_of_hours(self):
        """Dollar forecast is quantity based; a slow crew changes hours, not dollars."""
        fast = calc_inline_ecac(100, 50, 40, 10, 10)
        slow = calc_inline_ecac(100, 50, 40, 35, 10)
        assert fast.ecac == slow.ecac
        assert slow.remaining_hours > fast.remaining_hours

    def test_to_dict(self):
        data = calc_inline_ecac(100, 0, 40, 0, 10).to_dict()
        assert set(data) == {'ecac', 'required_rate', 'current_rate', 'remaining_qty', 'remaining_hours'}


class TestReverseRate:
    """Tests for calc_reverse_rate."""

    def test_basic_inversion(self):
        # $500 left at $10/unit = 50 units = 20 hrs at 0.4 hrs/unit
        result = calc_reverse_rate(100, 50, 40, 25, 1000, 10)

        assert result.remaining_qty == 50
        assert result.remaining_hours == pytest.approx(20)
        assert result.required_rate == pytest.approx(2.5)

    def test_forward_ecac_gives_bid_rate(self):
        """Feeding the forward ECAC back in yields the original bid rate."""
        budgeted_qty, actual_qty, budgeted_hours, actual_hours, cost = 580, 246, 80, 29.5, 10
        forward = calc_inline_ecac(budgeted_qty, actual_qty, budgeted_hours, actual_hours, cost)
        reverse = calc_reverse_rate(
            budgeted_qty, actual_qty, budgeted_hours, actual_hours, forward.ecac, cost
        )
        assert reverse.required_rate == pytest.approx(budgeted_qty / budgeted_hours)

    def test_forward_ecac_at_half_pace(self):
        """100 units / 50 hrs bid; 40 units in 25 hrs (1.6/hr vs. 2.0/hr bid)."""
        forward = calc_inline_ecac(100, 40, 50, 25, 10)
        reverse = calc_reverse_rate(100, 40, 50, 25, forward.ecac, 10)

        assert forward.ecac == pytest.approx(1000)
        assert forward.current_rate == pytest.approx(1.6)
        assert reverse.remaining_hours == pytest.approx(30)
        assert reverse.required_rate == pytest.approx(2.0)

    def test_target_below_cost_to_date(self):
        result = calc_reverse_rate(100, 50, 40, 25, 400, 10)
        assert result.remaining_hours == 0
        assert result.required_rate == 0

    def test_zero_unit_cost(self):
        result = calc_reverse_rate(100, 50, 40, 25, 1000, 0)
        assert result.required_rate == 0

    def test_zero_budgeted_qty(self):
        result = calc_reverse_rate(0, 0, 40, 0, 1000, 10)
        assert result.remaining_hours == 0
        assert result.required_rate == 0

    def test_explicit_cost_to_date(self):
        result = calc_reverse_rate(100, 50, 40, 25, 1000, 10, actual_cost_to_date=700)
        assert result.remaining_hours == pytest.approx(12)
        assert result.required_rate == pytest.approx(50 / 12)

    def test_higher_target_lowers_required_rate(self):
        rates = [
            calc_reverse_rate(100, 50, 40, 25, target, 10).required_rate
            for target in (900, 1000, 1200, 1500)
        ]
        assert rates == sorted(rates, reverse=True)


class TestFinalProductionRate:
    """Tests for closeout man-hours per unit."""

    def test_hours_per_unit(self):
        assert calc_final_production_rate(29.5, 246) == pytest.approx(0.11992, abs=1e-5)

    def test_zero_qty(self):
        assert calc_final_production_rate(10, 0) == 0
