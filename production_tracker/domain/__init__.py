"""
Domain Layer - Core business entities and services for production tracking.

This module contains:
- entities/: Immutable domain objects (Assembly, ProductionEvent, PmOverride, ...)
- services/: Domain services (ReviewService, SnapshotValidationService)
"""

from .entities import (
    Assembly, WorkPackageComponent, MaterialRequirement, CrewTemplateMember,
    ClaimingSchema, ClaimingStep, ClaimingProgress,
    ProductionEvent, EventSource,
    PmOverride, VarianceReason, TrueUpStatus,
    InventoryItem, MaterialDraw,
    Worker, KioskEntry, CrewAssignment,
    EstimatingRecord,
    ProjectSnapshot,
)

__all__ = [
    'Assembly', 'WorkPackageComponent', 'MaterialRequirement', 'CrewTemplateMember',
    'ClaimingSchema', 'ClaimingStep', 'ClaimingProgress',
    'ProductionEvent', 'EventSource',
    'PmOverride', 'VarianceReason', 'TrueUpStatus',
    'InventoryItem', 'MaterialDraw',
    'Worker', 'KioskEntry', 'CrewAssignment',
    'EstimatingRecord',
    'ProjectSnapshot',
]
