"""
Project Snapshot - Immutable bundle of everything the engine reads.

The store hands a snapshot to the engine; reviewer actions produce a
new snapshot (see domain.services.review_service) rather than
mutating this one.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .assembly import Assembly
from .claiming import ClaimingSchema
from .crew import CrewAssignment, KioskEntry, Worker
from .estimating import EstimatingRecord
from .inventory import InventoryItem
from .override import PmOverride, TrueUpStatus
from .production_event import ProductionEvent

# date -> worker_id -> wbs_code -> allocated hours
WorkerAllocations = Dict[str, Dict[str, Dict[str, float]]]


@dataclass(frozen=True)
class ProjectSnapshot:
    """
    Point-in-time state of one project.

    Attributes:
        name: Project name
        assemblies: Budgeted scope items
        claiming_schemas: Rules-of-credit schemas, keyed by id on lookup
        production_events: Field reports in insertion (chronological) order
        pm_overrides: At most one per WBS code
        inventory: On-hand consumables
        provisional_codes: WBS codes open for reviewer true-up
        true_up_statuses: Reviewer status by WBS code
        ecac_overrides: Reviewer-entered target ECAC by WBS code
        estimating_database: Final rates pushed at closeout
        workers, kiosk_entries, crew_assignments: Crew time capture
        worker_allocations: Kiosk hours split across WBS codes
        applied_drawdowns: Event ids whose drawdown has hit inventory
    """

    name: str = ""
    assemblies: Tuple[Assembly, ...] = field(default_factory=tuple)
    claiming_schemas: Tuple[ClaimingSchema, ...] = field(default_factory=tuple)
    production_events: Tuple[ProductionEvent, ...] = field(default_factory=tuple)
    pm_overrides: Tuple[PmOverride, ...] = field(default_factory=tuple)
    inventory: Tuple[InventoryItem, ...] = field(default_factory=tuple)
    provisional_codes: Tuple[str, ...] = field(default_factory=tuple)
    true_up_statuses: Dict[str, TrueUpStatus] = field(default_factory=dict)
    ecac_overrides: Dict[str, str] = field(default_factory=dict)
    estimating_database: Tuple[EstimatingRecord, ...] = field(default_factory=tuple)
    workers: Tuple[Worker, ...] = field(default_factory=tuple)
    kiosk_entries: Tuple[KioskEntry, ...] = field(default_factory=tuple)
    crew_assignments: Tuple[CrewAssignment, ...] = field(default_factory=tuple)
    worker_allocations: WorkerAllocations = field(default_factory=dict)
    applied_drawdowns: Tuple[str, ...] = field(default_factory=tuple)

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_assembly(self, wbs_code: str) -> Optional[Assembly]:
        for assembly in self.assemblies:
            if assembly.wbs_code == wbs_code:
                return assembly
        return None

    def get_schema(self, schema_id: Optional[str]) -> Optional[ClaimingSchema]:
        if not schema_id:
            return None
        for schema in self.claiming_schemas:
            if schema.id == schema_id:
                return schema
        return None

    def schema_for(self, assembly: Assembly) -> Optional[ClaimingSchema]:
        """Claiming schema the assembly is tracked by, if any."""
        return self.get_schema(assembly.claiming_schema_id)

    def get_override(self, wbs_code: str) -> Optional[PmOverride]:
        for override in self.pm_overrides:
            if override.wbs_code == wbs_code:
                return override
        return None

    def events_for(self, wbs_code: str) -> List[ProductionEvent]:
        """Events for a code, insertion order preserved."""
        return [e for e in self.production_events if e.wbs_code == wbs_code]

    def status_for(self, wbs_code: str) -> TrueUpStatus:
        return self.true_up_statuses.get(wbs_code, TrueUpStatus.PENDING)

    def provisional_assemblies(self) -> List[Assembly]:
        """Assemblies for the provisional codes, skipping unknown codes."""
        result = []
        for code in self.provisional_codes:
            assembly = self.get_assembly(code)
            if assembly is not None:
                result.append(assembly)
        return result

    def is_pushed(self, wbs_code: str) -> bool:
        return any(r.wbs_code == wbs_code for r in self.estimating_database)

    def sorted_events(self) -> Tuple[ProductionEvent, ...]:
        """
        Events ordered by date key.

        The sort is stable, so same-day events keep insertion order.
        Use this when the store does not preserve chronological order.
        """
        return tuple(sorted(self.production_events, key=lambda e: e.date))
