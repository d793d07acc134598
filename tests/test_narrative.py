"""
Tests for component and assembly narratives.
"""
from production_tracker.engine import (
    AssemblyEAC,
    analyze_components,
    calc_assembly_eac,
    generate_component_narrative,
    generate_eac_narrative,
)


class TestComponentNarrative:
    """Tests for generate_component_narrative."""

    def test_on_track(self, slab):
        base = analyze_components(slab, 50)[0]
        assert generate_component_narrative(base, 50) == (
            "Base prep has earned 20.00 of the 50 parent hours. "
            "At 50% progress on 1000 SF planned, the inferred rate is 25.00 SF/hr vs. "
            "bid rate of 25.00 SF/hr: on track with bid."
        )

    def test_behind(self, slab):
        forms = analyze_components(slab, 50)[1]
        text = generate_component_narrative(forms, 50)
        assert text.startswith("Edge forms has earned 15.00 of the 50 parent hours.")
        assert "6.67 LF/hr" in text
        assert text.endswith("50% slower than bid.")

    def test_ahead(self, slab):
        # Half the hours for the same installed quantity doubles the rate
        base = analyze_components(slab, 25)[0]
        assert generate_component_narrative(base, 25).endswith("100% faster than bid.")

    def test_no_progress(self, slab):
        pour = analyze_components(slab, 50)[2]
        assert generate_component_narrative(pour, 50) == "Place & finish: No progress recorded yet."

    def test_no_parent_hours(self, slab):
        base = analyze_components(slab, 0)[0]
        assert generate_component_narrative(base, 0) == "Base prep: No progress recorded yet."


class TestEACNarrative:
    """Tests for generate_eac_narrative."""

    def test_over_budget(self, slab):
        eac = calc_assembly_eac(slab, 50)
        assert generate_eac_narrative(eac, slab) == (
            "At current pace, this assembly will consume 130.0 hrs instead of the "
            "budgeted 100: 30.0 hrs over budget ($3,600 impact)."
        )

    def test_ahead_of_budget(self, slab):
        eac = AssemblyEAC(
            total_hours_at_completion=90,
            total_projected_overrun_hrs=-10,
            dollar_impact=-1200,
            weighted_progress=0.5,
            hourly_rate=120,
        )
        assert generate_eac_narrative(eac, slab) == (
            "Tracking ahead of budget. Projected to finish in 90.0 hrs vs. 100 budgeted, "
            "saving 10.0 hrs ($1,200)."
        )

    def test_within_tolerance_is_on_track(self, slab):
        eac = AssemblyEAC(
            total_hours_at_completion=100.3,
            total_projected_overrun_hrs=0.3,
            dollar_impact=36,
            weighted_progress=0.5,
            hourly_rate=120,
        )
        assert generate_eac_narrative(eac, slab) == "On track. Projected 100.3 hrs against 100 budgeted."

    def test_custom_tolerance(self, slab):
        eac = AssemblyEAC(
            total_hours_at_completion=102,
            total_projected_overrun_hrs=2,
            dollar_impact=240,
            weighted_progress=0.5,
            hourly_rate=120,
        )
        assert generate_eac_narrative(eac, slab, tolerance_hours=5).startswith("On track.")

    def test_no_progress(self, slab):
        eac = AssemblyEAC(
            total_hours_at_completion=100,
            total_projected_overrun_hrs=0,
            dollar_impact=0,
            weighted_progress=0,
            hourly_rate=120,
        )
        assert generate_eac_narrative(eac, slab) == (
            "No component progress recorded yet. "
            "EAC projections will appear once field data flows in."
        )
