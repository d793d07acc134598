"""
Review Service - Reviewer actions over a project snapshot.

Each action builds a new ProjectSnapshot with dataclasses.replace and
swaps it in; earlier snapshots are never modified, so anything already
computed from them stays valid.

Implements the true-up flow:
- PM overrides (one live override per code; status becomes 'adjusted'
  unless the code is flagged)
- True-up status and target ECAC entries
- Closeout push of final rates to the estimating database
- Exactly-once material drawdown per production event
"""
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from production_tracker.domain.entities import (
    EstimatingRecord,
    PmOverride,
    ProductionEvent,
    ProjectSnapshot,
    TrueUpStatus,
)
from production_tracker.domain.exceptions import (
    AssemblyNotFoundError,
    DrawdownAlreadyAppliedError,
    ValidationError,
)
from production_tracker.engine import (
    CloseoutRate,
    DEFAULT_POLICY,
    Policy,
    apply_drawdown,
    calc_closeout_rates,
    calc_material_drawdown,
)

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Applies reviewer actions to a snapshot.

    Attributes:
        snapshot: Current snapshot; replaced (not mutated) by each action
        policy: Engine thresholds used for drawdown rounding
    """

    def __init__(self, snapshot: ProjectSnapshot, policy: Policy = DEFAULT_POLICY):
        self.snapshot = snapshot
        self.policy = policy

    def _require_assembly(self, wbs_code: str) -> None:
        if self.snapshot.get_assembly(wbs_code) is None:
            raise AssemblyNotFoundError(wbs_code)

    # =========================================================================
    # Overrides and status
    # =========================================================================

    def set_pm_override(self, override: PmOverride) -> ProjectSnapshot:
        """
        Create or replace the override for a code.

        The code's status becomes 'adjusted' unless it is 'flagged'.

        Raises:
            AssemblyNotFoundError: Unknown WBS code
            ValidationError: Negative validated quantity or hours
        """
        self._require_assembly(override.wbs_code)
        if override.validated_qty < 0:
            raise ValidationError("validated_qty", "must be non-negative")
        if override.validated_hours < 0:
            raise ValidationError("validated_hours", "must be non-negative")

        snapshot = self.snapshot
        replaced = False
        overrides = []
        for existing in snapshot.pm_overrides:
            if existing.wbs_code == override.wbs_code:
                overrides.append(override)
                replaced = True
            else:
                overrides.append(existing)
        if not replaced:
            overrides.append(override)

        statuses = dict(snapshot.true_up_statuses)
        if statuses.get(override.wbs_code) != TrueUpStatus.FLAGGED:
            statuses[override.wbs_code] = TrueUpStatus.ADJUSTED

        logger.info(
            f"{'Replaced' if replaced else 'Set'} PM override for {override.wbs_code}: "
            f"qty={override.validated_qty}, hours={override.validated_hours}"
        )
        self.snapshot = replace(
            snapshot,
            pm_overrides=tuple(overrides),
            true_up_statuses=statuses,
        )
        return self.snapshot

    def set_true_up_status(self, wbs_code: str, status: TrueUpStatus) -> ProjectSnapshot:
        """Set the reviewer status for a code."""
        self._require_assembly(wbs_code)
        statuses = dict(self.snapshot.true_up_statuses)
        statuses[wbs_code] = status
        logger.info(f"True-up status for {wbs_code} set to {status.value}")
        self.snapshot = replace(self.snapshot, true_up_statuses=statuses)
        return self.snapshot

    def set_ecac_override(self, wbs_code: str, value: str) -> ProjectSnapshot:
        """
        Store the reviewer's target ECAC as typed.

        The raw text is kept so a half-typed value survives; parse it
        with parse_ecac_override before using it.
        """
        self._require_assembly(wbs_code)
        overrides = dict(self.snapshot.ecac_overrides)
        overrides[wbs_code] = value
        self.snapshot = replace(self.snapshot, ecac_overrides=overrides)
        return self.snapshot

    def parse_ecac_override(self, wbs_code: str) -> Optional[float]:
        """Target ECAC for a code, or None when unset or not a number."""
        raw = self.snapshot.ecac_overrides.get(wbs_code)
        if raw is None:
            return None
        try:
            return float(str(raw).replace('$', '').replace(',', '').strip())
        except ValueError:
            return None

    # =========================================================================
    # Closeout
    # =========================================================================

    def push_to_estimating(
        self,
        wbs_codes: Iterable[str],
        pushed_at: Optional[str] = None,
    ) -> List[EstimatingRecord]:
        """
        Push final production rates for the selected codes.

        Only pushable codes (hours logged, not yet pushed) are sent.
        Existing records for a code are replaced.

        Returns:
            The records that were pushed
        """
        selected = set(wbs_codes)
        stamp = pushed_at or datetime.now(timezone.utc).isoformat()
        rates: List[CloseoutRate] = [
            r for r in calc_closeout_rates(self.snapshot)
            if r.wbs_code in selected and r.pushable
        ]
        records = [
            EstimatingRecord(
                wbs_code=r.wbs_code,
                description=r.description,
                final_rate=r.final_rate,
                uom=r.uom,
                pushed_at=stamp,
            )
            for r in rates
        ]
        if not records:
            logger.warning("No pushable production rates in selection")
            return records

        pushed_codes = {r.wbs_code for r in records}
        database = tuple(
            r for r in self.snapshot.estimating_database if r.wbs_code not in pushed_codes
        ) + tuple(records)
        self.snapshot = replace(self.snapshot, estimating_database=database)

        logger.info(
            f"{len(records)} production rate{'s' if len(records) != 1 else ''} "
            f"pushed to estimating database"
        )
        return records

    # =========================================================================
    # Inventory
    # =========================================================================

    def record_drawdown(self, event: ProductionEvent) -> ProjectSnapshot:
        """
        Draw inventory down for one production event.

        Raises:
            AssemblyNotFoundError: Event references an unknown code
            DrawdownAlreadyAppliedError: Event was already drawn down
        """
        if event.id in self.snapshot.applied_drawdowns:
            raise DrawdownAlreadyAppliedError(event.id)

        assembly = self.snapshot.get_assembly(event.wbs_code)
        if assembly is None:
            raise AssemblyNotFoundError(event.wbs_code)

        draws = calc_material_drawdown(
            assembly, event.actual_qty, decimals=self.policy.drawdown_decimals
        )
        for draw in draws:
            logger.info(f"Drawdown {draw.item}: {draw.qty} for event {event.id}")

        self.snapshot = replace(
            self.snapshot,
            inventory=apply_drawdown(self.snapshot.inventory, draws),
            applied_drawdowns=self.snapshot.applied_drawdowns + (event.id,),
        )
        return self.snapshot
