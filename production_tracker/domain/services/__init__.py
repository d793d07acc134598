"""
Domain Services - Reviewer actions and structural validation.
"""

from .review_service import ReviewService
from .validation_service import SnapshotValidationService

__all__ = [
    'ReviewService',
    'SnapshotValidationService',
]
