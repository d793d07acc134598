"""
Snapshot Validation Service - Structural checks before calling the engine.

The engine assumes well-formed input and never validates it. This
service checks the structural rules a store must honour:
- WBS codes are unique
- Claiming schema references resolve
- Events and overrides reference known codes
- At most one PM override per code
- Quantities and hours are non-negative

Claiming schema weights that do not sum to 1.0 are reported as
warnings only; they never change engine output.
"""
import logging
import math
from collections import Counter
from typing import List, Tuple

from production_tracker.domain.entities import ProjectSnapshot
from production_tracker.domain.exceptions import (
    ClaimingSchemaNotFoundError,
    ComponentReferenceError,
    DomainError,
    DuplicateAssemblyError,
    OverrideConflictError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SCHEMA_WEIGHT_TOLERANCE = 0.001


class SnapshotValidationService:
    """
    Validates a ProjectSnapshot's structure.

    Usage:
        errors, warnings = SnapshotValidationService(snapshot).validate()
    """

    def __init__(self, snapshot: ProjectSnapshot):
        self.snapshot = snapshot

    def collect_errors(self) -> List[DomainError]:
        """All structural errors, in discovery order."""
        snapshot = self.snapshot
        errors: List[DomainError] = []

        code_counts = Counter(a.wbs_code for a in snapshot.assemblies)
        for code, count in code_counts.items():
            if count > 1:
                errors.append(DuplicateAssemblyError(code))

        schema_ids = {s.id for s in snapshot.claiming_schemas}
        for assembly in snapshot.assemblies:
            if assembly.claiming_schema_id and assembly.claiming_schema_id not in schema_ids:
                errors.append(ClaimingSchemaNotFoundError(
                    assembly.claiming_schema_id, assembly.wbs_code
                ))
            for name in ("budgeted_qty", "budgeted_hours", "blended_unit_cost"):
                if getattr(assembly, name) < 0:
                    errors.append(ValidationError(
                        f"{assembly.wbs_code}.{name}", "must be non-negative"
                    ))
            for comp in assembly.components:
                if comp.plan_qty < 0 or comp.budgeted_hours < 0 or comp.qty_installed < 0:
                    errors.append(ValidationError(
                        f"{assembly.wbs_code}.{comp.id}", "component quantities must be non-negative"
                    ))

        for event in snapshot.production_events:
            if event.wbs_code not in code_counts:
                errors.append(ComponentReferenceError("ProductionEvent", event.id, event.wbs_code))
            if event.actual_hours < 0 or event.actual_qty < 0 or event.equipment_hours < 0:
                errors.append(ValidationError(event.id, "event quantities must be non-negative"))
            for progress in event.claiming_progress:
                if not 0 <= progress.percent_complete <= 100:
                    errors.append(ValidationError(
                        f"{event.id}.{progress.step_name}", "percent_complete must be within 0-100"
                    ))

        override_counts = Counter(o.wbs_code for o in snapshot.pm_overrides)
        for code, count in override_counts.items():
            if code not in code_counts:
                errors.append(ComponentReferenceError("PmOverride", code, code))
            if count > 1:
                errors.append(OverrideConflictError(code, count))

        return errors

    def collect_warnings(self) -> List[str]:
        """Non-fatal observations (schema weights not summing to 1.0)."""
        warnings = []
        for schema in self.snapshot.claiming_schemas:
            total = schema.total_weight
            if not math.isclose(total, 1.0, abs_tol=SCHEMA_WEIGHT_TOLERANCE):
                warnings.append(
                    f"Claiming schema '{schema.id}' step weights sum to {total:.3f}, not 1.0"
                )
        return warnings

    def validate(self, strict: bool = False) -> Tuple[List[str], List[str]]:
        """
        Validate the snapshot.

        Args:
            strict: Raise the first error instead of returning messages

        Returns:
            Tuple of (error messages, warning messages)

        Raises:
            DomainError: First structural error, when strict
        """
        errors = self.collect_errors()
        warnings = self.collect_warnings()

        for warning in warnings:
            logger.warning(warning)

        if errors:
            logger.warning(f"Snapshot '{self.snapshot.name}' has {len(errors)} structural errors")
            if strict:
                raise errors[0]

        return [e.message for e in errors], warnings
