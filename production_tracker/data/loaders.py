"""
Data Loaders for the Production Tracker

Loads project data exported by the store:
- snapshot JSON: the whole project (assemblies, events, overrides, ...)
- events CSV: production events from a daily-log export
"""
import json
import logging
import math
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from production_tracker.domain.entities import (
    ClaimingProgress,
    EventSource,
    ProductionEvent,
    ProjectSnapshot,
)
from production_tracker.domain.exceptions import SnapshotLoadError
from production_tracker.schemas import SnapshotIn

logger = logging.getLogger(__name__)

# Accepted header spellings for each event column
EVENT_COLUMNS = {
    'id': ['id', 'event_id', 'ID'],
    'wbs_code': ['wbs_code', 'WBS', 'WBS Code', 'code'],
    'date': ['date', 'Date', 'work_date'],
    'actual_hours': ['actual_hours', 'hours', 'Hours', 'Man Hours'],
    'actual_qty': ['actual_qty', 'qty', 'Qty', 'Quantity'],
    'equipment_hours': ['equipment_hours', 'equip_hours', 'Equipment Hours'],
    'description': ['description', 'note', 'Notes', 'Description'],
    'claiming_progress': ['claiming_progress', 'progress', 'Claiming'],
    'source': ['source', 'Source'],
}

REQUIRED_EVENT_COLUMNS = ('wbs_code',)


def parse_claiming_progress(value) -> Tuple[ClaimingProgress, ...]:
    """
    Parse a 'step:pct;step:pct' cell into claiming progress.

    Blank cells and malformed pairs are skipped.
    """
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return tuple()
    text = str(value).strip()
    if not text:
        return tuple()

    progress = []
    for pair in text.split(';'):
        if ':' not in pair:
            continue
        step, _, pct = pair.rpartition(':')
        step = step.strip()
        try:
            percent = float(pct.strip().rstrip('%'))
        except ValueError:
            logger.warning(f"Skipping malformed claiming progress '{pair}'")
            continue
        if step:
            progress.append(ClaimingProgress(step_name=step, percent_complete=percent))
    return tuple(progress)


def _to_float(value) -> float:
    """Numeric cell to float; blanks and junk become 0."""
    if value is None:
        return 0.0
    try:
        if pd.isna(value):
            return 0.0
    except (TypeError, ValueError):
        pass
    try:
        result = float(str(value).replace(',', '').strip() or 0)
    except ValueError:
        return 0.0
    if not math.isfinite(result):
        logger.warning(f"Treating non-finite value '{value}' as 0")
        return 0.0
    return result


class SnapshotLoader:
    """
    Unified loader for project snapshots.

    Handles JSON snapshot exports and CSV event logs with various
    column naming conventions.
    """

    def __init__(self, data_dir: Union[str, Path] = "."):
        """
        Initialize loader.

        Args:
            data_dir: Directory relative paths are resolved against
        """
        self.data_dir = Path(data_dir)

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.data_dir / path

    def load_json(self, path: Union[str, Path]) -> ProjectSnapshot:
        """
        Load a snapshot JSON export.

        Raises:
            SnapshotLoadError: Missing file, undecodable or invalid JSON, or
                invalid records
        """
        path = self._resolve(path)
        if not path.exists():
            raise SnapshotLoadError(str(path), "file not found")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotLoadError(str(path), f"invalid JSON: {e}")
        except UnicodeDecodeError as e:
            raise SnapshotLoadError(str(path), f"not UTF-8 text: {e}")

        try:
            snapshot = SnapshotIn.model_validate(raw).to_snapshot()
        except PydanticValidationError as e:
            raise SnapshotLoadError(str(path), f"{e.error_count()} invalid field(s): {e}")

        logger.info(
            f"Loaded snapshot '{snapshot.name}': {len(snapshot.assemblies)} assemblies, "
            f"{len(snapshot.production_events)} events"
        )
        return snapshot

    def load_events_csv(self, path: Union[str, Path]) -> List[ProductionEvent]:
        """
        Load production events from a CSV daily-log export.

        Rows keep file order, which the engine treats as chronological.
        Missing ids are generated from the row number.

        Raises:
            SnapshotLoadError: Missing, empty or unparseable file, or no
                WBS code column
        """
        path = self._resolve(path)
        if not path.exists():
            raise SnapshotLoadError(str(path), "file not found")

        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            raise SnapshotLoadError(str(path), "file is empty")
        except pd.errors.ParserError as e:
            raise SnapshotLoadError(str(path), f"unreadable CSV: {e}")
        except UnicodeDecodeError as e:
            raise SnapshotLoadError(str(path), f"not UTF-8 text: {e}")
        columns = self._map_columns(df)
        for required in REQUIRED_EVENT_COLUMNS:
            if required not in columns:
                raise SnapshotLoadError(str(path), f"missing column '{required}'")

        events = []
        for idx, row in df.iterrows():
            def cell(name: str, default=""):
                col = columns.get(name)
                return row[col] if col is not None else default

            wbs_code = str(cell('wbs_code')).strip()
            if not wbs_code:
                logger.warning(f"Skipping row {idx}: no WBS code")
                continue

            source_raw = str(cell('source', EventSource.MANUAL.value)).strip().lower()
            try:
                source = EventSource(source_raw)
            except ValueError:
                source = EventSource.MANUAL

            events.append(ProductionEvent(
                id=str(cell('id')).strip() or f"row-{idx + 1}",
                wbs_code=wbs_code,
                date=str(cell('date')).strip(),
                actual_hours=_to_float(cell('actual_hours', 0)),
                actual_qty=_to_float(cell('actual_qty', 0)),
                equipment_hours=_to_float(cell('equipment_hours', 0)),
                description=str(cell('description')),
                claiming_progress=parse_claiming_progress(cell('claiming_progress')),
                source=source,
            ))

        logger.info(f"Loaded {len(events)} production events from {path.name}")
        return events

    def _map_columns(self, df: pd.DataFrame) -> dict:
        """Map canonical event fields to the CSV's actual headers."""
        mapped = {}
        for field_name, candidates in EVENT_COLUMNS.items():
            col = self._first_present(df, candidates)
            if col is not None:
                mapped[field_name] = col
        return mapped

    @staticmethod
    def _first_present(df: pd.DataFrame, candidates: List[str]) -> Optional[str]:
        for col in candidates:
            if col in df.columns:
                return col
        return None
