"""
Tests for per-code event aggregation and progress.
"""
import pytest

from production_tracker.domain.entities import (
    Assembly,
    ClaimingProgress,
    ClaimingSchema,
    ClaimingStep,
    ProductionEvent,
)
from production_tracker.engine import (
    aggregate_events,
    calc_claiming_percent_complete,
    calc_percent_complete,
    calc_simple_percent_complete,
    events_for_code,
    latest_event,
)


class TestAggregateEvents:
    """Tests for aggregate_events."""

    def test_sums_matching_code(self, events):
        totals = aggregate_events(events, "03-1100")
        assert totals.total_hours == pytest.approx(29.5)
        assert totals.total_qty == pytest.approx(246)
        assert totals.total_equip_hours == pytest.approx(3.5)

    def test_unknown_code_is_all_zeros(self, events):
        totals = aggregate_events(events, "99-9999")
        assert totals.total_hours == 0
        assert totals.total_qty == 0
        assert totals.total_equip_hours == 0

    def test_order_independent(self, events):
        """Reversing the event list gives the same totals."""
        forward = aggregate_events(events, "03-2100")
        backward = aggregate_events(tuple(reversed(events)), "03-2100")
        assert forward == backward

    def test_empty_events(self):
        assert aggregate_events([], "03-1100").total_hours == 0


class TestLatestEvent:
    """Tests for event filtering by position."""

    def test_events_for_code_preserves_order(self, events):
        assert [e.id for e in events_for_code(events, "03-2100")] == ["e2", "e4"]

    def test_latest_event_is_last_by_position(self, events):
        assert latest_event(events, "03-1100").id == "e3"

    def test_latest_event_none_without_events(self, events):
        assert latest_event(events, "99-9999") is None


class TestSimplePercentComplete:
    """Tests for the quantity ratio."""

    def test_ratio(self):
        assert calc_simple_percent_complete(246, 580) == pytest.approx(0.4241, abs=1e-4)

    def test_zero_budget_is_zero(self):
        assert calc_simple_percent_complete(50, 0) == 0

    def test_capped_at_one(self):
        assert calc_simple_percent_complete(700, 580) == 1.0

    def test_monotonic_in_actual_qty(self):
        values = [calc_simple_percent_complete(q, 580) for q in (0, 100, 290, 580, 1000)]
        assert values == sorted(values)


class TestClaimingPercentComplete:
    """Tests for weighted claiming progress."""

    def test_weighted_sum(self, footing_schema):
        progress = [
            ClaimingProgress("Excavate", 100),
            ClaimingProgress("Form", 100),
            ClaimingProgress("Rebar", 50),
        ]
        # 0.2 * 1 + 0.3 * 1 + 0.2 * 0.5
        assert calc_claiming_percent_complete(footing_schema, progress) == pytest.approx(0.6)

    def test_missing_steps_count_as_zero(self, footing_schema):
        assert calc_claiming_percent_complete(footing_schema, []) == 0

    def test_all_steps_complete(self, footing_schema):
        progress = [ClaimingProgress(s.name, 100) for s in footing_schema.steps]
        assert calc_claiming_percent_complete(footing_schema, progress) == pytest.approx(1.0)

    def test_unknown_step_ignored(self, footing_schema):
        progress = [ClaimingProgress("Strip", 100)]
        assert calc_claiming_percent_complete(footing_schema, progress) == 0

    def test_weights_not_normalised(self):
        """Weights are used as given even when they do not sum to 1."""
        schema = ClaimingSchema("odd", steps=(ClaimingStep("A", 0.5), ClaimingStep("B", 0.7)))
        progress = [ClaimingProgress("A", 100), ClaimingProgress("B", 100)]
        assert calc_claiming_percent_complete(schema, progress) == pytest.approx(1.2)


class TestPercentComplete:
    """Tests for mode selection."""

    def test_uses_latest_snapshot_only(self, footings, footing_schema, events):
        pct = calc_percent_complete(footings, events, footing_schema, actual_qty=18)
        assert pct == pytest.approx(0.6)

    def test_schema_without_events_is_zero(self, footings, footing_schema):
        assert calc_percent_complete(footings, [], footing_schema, actual_qty=0) == 0

    def test_latest_event_without_progress_drops_to_zero(self, footings, footing_schema, events):
        later = events + (ProductionEvent("e9", "03-2100", "2024-06-12", actual_hours=8),)
        assert calc_percent_complete(footings, later, footing_schema, actual_qty=18) == 0

    def test_simple_mode_uses_given_qty(self, wall_forms, events):
        assert calc_percent_complete(wall_forms, events, None, actual_qty=290) == pytest.approx(0.5)

    def test_zero_budget_qty_simple_mode(self):
        assembly = Assembly("X", budgeted_qty=0, budgeted_hours=10)
        assert calc_percent_complete(assembly, [], None, actual_qty=5) == 0
