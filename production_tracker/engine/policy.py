"""
Policy thresholds used by the earned-value engine.

The module constants are the defaults every engine function falls back
to. Policy bundles them so a caller can load overrides from
production_config.yaml once and pass them through; the engine itself
never reads configuration.
"""
from dataclasses import dataclass

# Performance factor status tiers
PF_ON_TRACK = 0.95
PF_AT_RISK = 0.80

# Component inferred-rate / bid-rate ratio tiers
VARIANCE_AHEAD = 1.10
VARIANCE_ON_TRACK = 0.90

# Recovery is feasible only below this multiple of the bid rate
RECOVERY_RATE_MULTIPLE = 2.0

DRAWDOWN_DECIMALS = 2

# EAC narratives call an overrun within +/- this many hours "on track"
NARRATIVE_TOLERANCE_HOURS = 0.5


@dataclass(frozen=True)
class Policy:
    """Threshold set handed to the analysis and rollup functions."""

    pf_on_track: float = PF_ON_TRACK
    pf_at_risk: float = PF_AT_RISK
    variance_ahead: float = VARIANCE_AHEAD
    variance_on_track: float = VARIANCE_ON_TRACK
    recovery_rate_multiple: float = RECOVERY_RATE_MULTIPLE
    drawdown_decimals: int = DRAWDOWN_DECIMALS
    narrative_tolerance_hours: float = NARRATIVE_TOLERANCE_HOURS

    @classmethod
    def from_config(cls, config) -> "Policy":
        """
        Build a policy from a ProductionConfig.

        Args:
            config: ProductionConfig instance

        Returns:
            Policy with any configured thresholds applied
        """
        pf = config.performance_thresholds
        variance = config.variance_thresholds
        return cls(
            pf_on_track=float(pf.get("on_track", PF_ON_TRACK)),
            pf_at_risk=float(pf.get("at_risk", PF_AT_RISK)),
            variance_ahead=float(variance.get("ahead", VARIANCE_AHEAD)),
            variance_on_track=float(variance.get("on_track", VARIANCE_ON_TRACK)),
            recovery_rate_multiple=float(config.recovery_rate_multiple),
            drawdown_decimals=int(config.drawdown_decimals),
            narrative_tolerance_hours=float(config.narrative_tolerance_hours),
        )


DEFAULT_POLICY = Policy()
