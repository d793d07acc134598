"""
Shared fixtures: a small concrete package with one code of each kind.

- 03-1100 Wall Forms: simple ratio (no schema), 246 SF / 29.5 hrs logged
- 03-2100 Footings: tracked by a four-step claiming schema
- 03-3100 Slab on Grade: three weighted work-package components
"""
import json

import pytest

from production_tracker.domain.entities import (
    Assembly,
    ClaimingProgress,
    ClaimingSchema,
    ClaimingStep,
    EventSource,
    InventoryItem,
    MaterialRequirement,
    ProductionEvent,
    ProjectSnapshot,
    WorkPackageComponent,
)


@pytest.fixture
def wall_forms():
    return Assembly(
        wbs_code="03-1100",
        description="Wall Forms",
        budgeted_qty=580,
        uom="SF",
        budgeted_hours=80,
        blended_unit_cost=10,
    )


@pytest.fixture
def footing_schema():
    return ClaimingSchema(
        id="footings",
        name="Spread Footings",
        steps=(
            ClaimingStep("Excavate", 0.2),
            ClaimingStep("Form", 0.3),
            ClaimingStep("Rebar", 0.2),
            ClaimingStep("Pour", 0.3),
        ),
    )


@pytest.fixture
def footings():
    return Assembly(
        wbs_code="03-2100",
        description="Footings",
        budgeted_qty=40,
        uom="CY",
        budgeted_hours=100,
        blended_unit_cost=250,
        claiming_schema_id="footings",
    )


@pytest.fixture
def slab():
    return Assembly(
        wbs_code="03-3100",
        description="Slab on Grade",
        budgeted_qty=1000,
        uom="SF",
        budgeted_hours=100,
        blended_unit_cost=12,
        components=(
            WorkPackageComponent("base", "Base prep", "SF", plan_qty=1000, budgeted_hours=40, qty_installed=500),
            WorkPackageComponent("forms", "Edge forms", "LF", plan_qty=400, budgeted_hours=30, qty_installed=100),
            WorkPackageComponent("pour", "Place & finish", "SF", plan_qty=1000, budgeted_hours=30, qty_installed=0),
        ),
        materials=(
            MaterialRequirement("Concrete", 30, "CY"),
            MaterialRequirement("Rebar", 2000, "LB"),
        ),
    )


@pytest.fixture
def events():
    return (
        ProductionEvent("e1", "03-1100", "2024-06-10", actual_hours=14, actual_qty=120,
                        equipment_hours=2, description="Gang forms set", source=EventSource.KIOSK),
        ProductionEvent("e2", "03-2100", "2024-06-10", actual_hours=30, actual_qty=10,
                        claiming_progress=(ClaimingProgress("Excavate", 100), ClaimingProgress("Form", 50))),
        ProductionEvent("e3", "03-1100", "2024-06-11", actual_hours=15.5, actual_qty=126,
                        equipment_hours=1.5, description="  "),
        ProductionEvent("e4", "03-2100", "2024-06-11", actual_hours=20, actual_qty=8,
                        description="Rebar inspection passed",
                        claiming_progress=(ClaimingProgress("Excavate", 100), ClaimingProgress("Form", 100),
                                           ClaimingProgress("Rebar", 50))),
        ProductionEvent("e5", "03-3100", "2024-06-11", actual_hours=50, actual_qty=300),
    )


@pytest.fixture
def snapshot(wall_forms, footings, slab, footing_schema, events):
    return ProjectSnapshot(
        name="Test Project",
        assemblies=(wall_forms, footings, slab),
        claiming_schemas=(footing_schema,),
        production_events=events,
        inventory=(
            InventoryItem("Concrete", 100, "CY"),
            InventoryItem("Rebar", 5000, "LB"),
            InventoryItem("Form Oil", 10, "GAL"),
        ),
        provisional_codes=("03-1100", "03-2100", "03-3100"),
    )


@pytest.fixture
def snapshot_dict():
    """The same project as plain JSON-ready records."""
    return {
        "name": "Test Project",
        "assemblies": [
            {"wbs_code": "03-1100", "description": "Wall Forms", "budgeted_qty": 580,
             "uom": "SF", "budgeted_hours": 80, "blended_unit_cost": 10},
            {"wbs_code": "03-2100", "description": "Footings", "budgeted_qty": 40,
             "uom": "CY", "budgeted_hours": 100, "blended_unit_cost": 250,
             "claiming_schema_id": "footings"},
            {"wbs_code": "03-3100", "description": "Slab on Grade", "budgeted_qty": 1000,
             "uom": "SF", "budgeted_hours": 100, "blended_unit_cost": 12,
             "components": [
                 {"id": "base", "name": "Base prep", "uom": "SF", "plan_qty": 1000,
                  "budgeted_hours": 40, "qty_installed": 500},
                 {"id": "forms", "name": "Edge forms", "uom": "LF", "plan_qty": 400,
                  "budgeted_hours": 30, "qty_installed": 100},
                 {"id": "pour", "name": "Place & finish", "uom": "SF", "plan_qty": 1000,
                  "budgeted_hours": 30, "qty_installed": 0},
             ],
             "materials": [
                 {"item": "Concrete", "qty_required": 30, "uom": "CY"},
                 {"item": "Rebar", "qty_required": 2000, "uom": "LB"},
             ]},
        ],
        "claiming_schemas": [
            {"id": "footings", "name": "Spread Footings", "steps": [
                {"name": "Excavate", "weight": 0.2},
                {"name": "Form", "weight": 0.3},
                {"name": "Rebar", "weight": 0.2},
                {"name": "Pour", "weight": 0.3},
            ]},
        ],
        "production_events": [
            {"id": "e1", "wbs_code": "03-1100", "date": "2024-06-10", "actual_hours": 14,
             "actual_qty": 120, "equipment_hours": 2, "description": "Gang forms set",
             "source": "kiosk"},
            {"id": "e2", "wbs_code": "03-2100", "date": "2024-06-10", "actual_hours": 30,
             "actual_qty": 10, "claiming_progress": [
                 {"step_name": "Excavate", "percent_complete": 100},
                 {"step_name": "Form", "percent_complete": 50}]},
            {"id": "e3", "wbs_code": "03-1100", "date": "2024-06-11", "actual_hours": 15.5,
             "actual_qty": 126, "equipment_hours": 1.5},
            {"id": "e4", "wbs_code": "03-2100", "date": "2024-06-11", "actual_hours": 20,
             "actual_qty": 8, "description": "Rebar inspection passed", "claiming_progress": [
                 {"step_name": "Excavate", "percent_complete": 100},
                 {"step_name": "Form", "percent_complete": 100},
                 {"step_name": "Rebar", "percent_complete": 50}]},
            {"id": "e5", "wbs_code": "03-3100", "date": "2024-06-11", "actual_hours": 50,
             "actual_qty": 300},
        ],
        "pm_overrides": [],
        "inventory": [
            {"item": "Concrete", "on_hand": 100, "uom": "CY"},
            {"item": "Rebar", "on_hand": 5000, "uom": "LB"},
        ],
        "provisional_codes": ["03-1100", "03-2100", "03-3100"],
        "true_up_statuses": {"03-2100": "flagged"},
    }


@pytest.fixture
def snapshot_file(tmp_path, snapshot_dict):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_dict))
    return path
