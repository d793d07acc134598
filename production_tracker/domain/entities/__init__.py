"""
Domain Entities - Core immutable business objects.
"""

from .assembly import Assembly, WorkPackageComponent, MaterialRequirement, CrewTemplateMember
from .claiming import ClaimingSchema, ClaimingStep, ClaimingProgress
from .production_event import ProductionEvent, EventSource
from .override import PmOverride, VarianceReason, TrueUpStatus
from .inventory import InventoryItem, MaterialDraw
from .crew import Worker, KioskEntry, CrewAssignment
from .estimating import EstimatingRecord
from .snapshot import ProjectSnapshot, WorkerAllocations

__all__ = [
    'Assembly', 'WorkPackageComponent', 'MaterialRequirement', 'CrewTemplateMember',
    'ClaimingSchema', 'ClaimingStep', 'ClaimingProgress',
    'ProductionEvent', 'EventSource',
    'PmOverride', 'VarianceReason', 'TrueUpStatus',
    'InventoryItem', 'MaterialDraw',
    'Worker', 'KioskEntry', 'CrewAssignment',
    'EstimatingRecord',
    'ProjectSnapshot', 'WorkerAllocations',
]
