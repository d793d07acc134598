"""Data loading for project snapshots and event logs"""
from .loaders import SnapshotLoader, parse_claiming_progress

__all__ = ['SnapshotLoader', 'parse_claiming_progress']
