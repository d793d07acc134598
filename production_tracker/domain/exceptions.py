"""
Domain Exceptions for the production tracking model.

The earned-value engine never raises; these exceptions are used by the
layers around it that enforce structural rules:
- Assembly and schema references
- One live PM override per WBS code
- Exactly-once material drawdown per event
- Snapshot loading
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# =============================================================================
# Assembly Exceptions
# =============================================================================

class AssemblyNotFoundError(DomainError):
    """Raised when an assembly cannot be found by WBS code."""

    def __init__(self, wbs_code: str):
        message = f"Assembly with WBS code '{wbs_code}' not found"
        super().__init__(message, code="ASSEMBLY_NOT_FOUND")
        self.wbs_code = wbs_code


class DuplicateAssemblyError(DomainError):
    """Raised when two assemblies share a WBS code."""

    def __init__(self, wbs_code: str):
        message = f"Assembly with WBS code '{wbs_code}' is defined more than once"
        super().__init__(message, code="DUPLICATE_ASSEMBLY")
        self.wbs_code = wbs_code


class ClaimingSchemaNotFoundError(DomainError):
    """Raised when an assembly references an unknown claiming schema."""

    def __init__(self, schema_id: str, wbs_code: str):
        message = (
            f"Assembly '{wbs_code}' references claiming schema "
            f"'{schema_id}', which does not exist"
        )
        super().__init__(message, code="CLAIMING_SCHEMA_NOT_FOUND")
        self.schema_id = schema_id
        self.wbs_code = wbs_code


class ComponentReferenceError(DomainError):
    """Raised when a record points at a WBS code with no assembly."""

    def __init__(self, record_type: str, record_id: str, wbs_code: str):
        message = (
            f"{record_type} '{record_id}' references unknown "
            f"WBS code '{wbs_code}'"
        )
        super().__init__(message, code="UNKNOWN_REFERENCE")
        self.record_type = record_type
        self.record_id = record_id
        self.wbs_code = wbs_code


# =============================================================================
# Reviewer Flow Exceptions
# =============================================================================

class OverrideConflictError(DomainError):
    """Raised when more than one live override exists for a WBS code."""

    def __init__(self, wbs_code: str, count: int):
        message = (
            f"{count} PM overrides found for '{wbs_code}'; "
            f"at most one live override is allowed"
        )
        super().__init__(message, code="OVERRIDE_CONFLICT")
        self.wbs_code = wbs_code
        self.count = count


class DrawdownAlreadyAppliedError(DomainError):
    """Raised when a production event's drawdown is applied twice."""

    def __init__(self, event_id: str):
        message = f"Material drawdown for event '{event_id}' was already applied"
        super().__init__(message, code="DRAWDOWN_ALREADY_APPLIED")
        self.event_id = event_id


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(DomainError):
    """Raised when data validation fails."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Validation failed for '{field}': {message}", code="VALIDATION_ERROR")
        self.field = field


class SnapshotLoadError(DomainError):
    """Raised when a project snapshot cannot be read or parsed."""

    def __init__(self, source: str, reason: str):
        message = f"Could not load snapshot from '{source}': {reason}"
        super().__init__(message, code="SNAPSHOT_LOAD_ERROR")
        self.source = source
        self.reason = reason

