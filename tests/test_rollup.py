"""
Tests for work-package component rollup and assembly EAC.

Slab fixture: components weighted 40/30/30 hrs, 50 parent hours logged.
"""
import pytest

from production_tracker.domain.entities import Assembly, WorkPackageComponent
from production_tracker.engine import (
    ComponentAnalysis,
    Policy,
    VarianceFlag,
    analyze_components,
    calc_assembly_eac,
    calc_bid_rate,
    calc_component_eac,
    calc_inferred_rate,
    calc_progress_percent,
    calc_variance_flag,
    calc_variance_percent,
    calc_weight,
    component_weights,
)


def make_analysis(plan_qty, budgeted_hours, qty_installed, earned_hours, **overrides):
    bid_rate = calc_bid_rate(plan_qty, budgeted_hours)
    inferred_rate = calc_inferred_rate(qty_installed, earned_hours)
    fields = dict(
        id="c1",
        name="Component",
        uom="EA",
        plan_qty=plan_qty,
        budgeted_hours=budgeted_hours,
        weight=1.0,
        qty_installed=qty_installed,
        progress_pct=calc_progress_percent(qty_installed, plan_qty),
        earned_hours=earned_hours,
        earned_value=0.0,
        bid_rate=bid_rate,
        inferred_rate=inferred_rate,
        variance_flag=calc_variance_flag(inferred_rate, bid_rate),
        variance_pct=calc_variance_percent(inferred_rate, bid_rate),
    )
    fields.update(overrides)
    return ComponentAnalysis(**fields)


class TestWeights:
    """Tests for component weights."""

    def test_weights_from_sibling_hours(self, slab):
        assert component_weights(slab.components) == pytest.approx([0.4, 0.3, 0.3])

    def test_weights_sum_to_one(self, slab):
        assert sum(component_weights(slab.components)) == pytest.approx(1.0)

    def test_denominator_is_sibling_total(self):
        """Siblings carry 60 of the parent's 100 hours; weights still sum to 1."""
        assembly = Assembly(
            "X",
            budgeted_hours=100,
            components=(
                WorkPackageComponent("a", "A", budgeted_hours=45),
                WorkPackageComponent("b", "B", budgeted_hours=15),
            ),
        )
        weights = component_weights(assembly.components)

        assert weights == pytest.approx([0.75, 0.25])
        assert sum(weights) == pytest.approx(1.0)
        earned = [a.earned_hours for a in analyze_components(assembly, 40)]
        assert earned == pytest.approx([30, 10])

    def test_zero_total_hours(self):
        components = [WorkPackageComponent("a", "A"), WorkPackageComponent("b", "B")]
        assert component_weights(components) == [0.0, 0.0]

    def test_calc_weight_zero_total(self):
        assert calc_weight(10, 0) == 0


class TestRateHelpers:
    """Tests for bid/inferred rates and variance."""

    def test_bid_rate(self):
        assert calc_bid_rate(1000, 40) == 25
        assert calc_bid_rate(1000, 0) == 0

    def test_inferred_rate(self):
        assert calc_inferred_rate(500, 20) == 25
        assert calc_inferred_rate(500, 0) == 0

    def test_progress_capped(self):
        assert calc_progress_percent(1200, 1000) == 1.0
        assert calc_progress_percent(10, 0) == 0

    @pytest.mark.parametrize("inferred,expected", [
        (11.0, VarianceFlag.AHEAD),
        (10.0, VarianceFlag.ON_TRACK),
        (9.0, VarianceFlag.ON_TRACK),
        (8.9, VarianceFlag.BEHIND),
    ])
    def test_variance_flag(self, inferred, expected):
        assert calc_variance_flag(inferred, 10.0) == expected

    def test_variance_flag_zero_bid(self):
        assert calc_variance_flag(5.0, 0) == VarianceFlag.ON_TRACK

    def test_variance_percent(self):
        assert calc_variance_percent(12, 10) == pytest.approx(20)
        assert calc_variance_percent(5, 10) == pytest.approx(-50)
        assert calc_variance_percent(5, 0) == 0


class TestAnalyzeComponents:
    """Tests for analyze_components."""

    def test_back_allocated_hours(self, slab):
        analyses = analyze_components(slab, 50)
        assert [a.earned_hours for a in analyses] == pytest.approx([20, 15, 15])

    def test_earned_hours_sum_to_parent(self, slab):
        analyses = analyze_components(slab, 50)
        assert sum(a.earned_hours for a in analyses) == pytest.approx(50)

    def test_earned_value_is_progress_based(self, slab):
        base, forms, pour = analyze_components(slab, 50)
        assert base.earned_value == pytest.approx(20)
        assert forms.earned_value == pytest.approx(7.5)
        assert pour.earned_value == 0

    def test_variance_flags(self, slab):
        base, forms, pour = analyze_components(slab, 50)
        assert base.variance_flag == VarianceFlag.ON_TRACK
        assert forms.variance_flag == VarianceFlag.BEHIND
        assert forms.variance_pct == pytest.approx(-50)
        assert pour.variance_flag == VarianceFlag.BEHIND

    def test_custom_policy_thresholds(self, slab):
        policy = Policy(variance_on_track=0.4)
        _, forms, _ = analyze_components(slab, 50, policy)
        assert forms.variance_flag == VarianceFlag.ON_TRACK

    def test_weight_pct(self, slab):
        assert analyze_components(slab, 50)[0].weight_pct == pytest.approx(40)


class TestComponentEAC:
    """Tests for calc_component_eac."""

    def test_on_pace_component(self, slab):
        base = analyze_components(slab, 50)[0]
        eac = calc_component_eac(base)

        assert eac.hours_at_completion == pytest.approx(40)
        assert eac.projected_overrun_hrs == pytest.approx(0)
        assert eac.recovery_rate == pytest.approx(25)
        assert eac.can_recover is True

    def test_slow_component_overruns(self, slab):
        forms = analyze_components(slab, 50)[1]
        eac = calc_component_eac(forms)

        assert eac.hours_at_completion == pytest.approx(60)
        assert eac.projected_overrun_hrs == pytest.approx(30)
        assert eac.recovery_rate == pytest.approx(20)
        assert eac.can_recover is True

    def test_nothing_installed_finishes_on_budget(self, slab):
        pour = analyze_components(slab, 50)[2]
        eac = calc_component_eac(pour)

        assert eac.hours_at_completion == 30
        assert eac.projected_overrun_hrs == 0
        assert eac.recovery_rate == pytest.approx(1000 / 30)
        assert eac.can_recover is True

    def test_recovery_infeasible(self):
        """Bid 2 units/hr; 15 units left in 3 budget hours needs 5 units/hr."""
        analysis = make_analysis(plan_qty=20, budgeted_hours=10, qty_installed=5, earned_hours=7)
        eac = calc_component_eac(analysis, recovery_multiple=2.0)

        assert analysis.bid_rate == 2
        assert eac.recovery_rate == pytest.approx(5)
        assert eac.can_recover is False

    def test_budget_hours_exhausted(self):
        analysis = make_analysis(plan_qty=20, budgeted_hours=10, qty_installed=5, earned_hours=12)
        eac = calc_component_eac(analysis)

        assert eac.recovery_rate == 0
        assert eac.can_recover is True

    def test_zero_bid_rate_can_recover(self):
        analysis = make_analysis(plan_qty=20, budgeted_hours=0, qty_installed=5, earned_hours=3)
        assert calc_component_eac(analysis).can_recover is True


class TestAssemblyEAC:
    """Tests for calc_assembly_eac."""

    def test_rollup_totals(self, slab):
        eac = calc_assembly_eac(slab, 50)

        assert eac.total_hours_at_completion == pytest.approx(130)
        assert eac.total_projected_overrun_hrs == pytest.approx(30)
        assert eac.hourly_rate == pytest.approx(120)
        assert eac.dollar_impact == pytest.approx(3600)
        assert eac.weighted_progress == pytest.approx(0.275)
        assert len(eac.components) == 3

    def test_no_parent_hours(self, slab):
        """Without hours every component projects at plan."""
        eac = calc_assembly_eac(slab, 0)
        assert eac.total_hours_at_completion == pytest.approx(100)
        assert eac.total_projected_overrun_hrs == pytest.approx(0)
        assert eac.dollar_impact == pytest.approx(0)

    def test_zero_budget_hours_rate(self):
        assembly = Assembly("X", budgeted_qty=10, budgeted_hours=0, blended_unit_cost=5)
        assert calc_assembly_eac(assembly, 10).hourly_rate == 0

    def test_to_dict_merges_projection(self, slab):
        data = calc_assembly_eac(slab, 50).to_dict()
        first = data['components'][0]
        assert first['name'] == "Base prep"
        assert first['variance_flag'] == "on_track"
        assert 'hours_at_completion' in first
