"""
Configuration loader for the Production Tracker.

Loads settings from production_config.yaml and provides typed access
to the policy thresholds, formatting and logging sections.
"""
from pathlib import Path
from typing import Any, Optional
from functools import lru_cache

import yaml


# Default config ships inside the package
DEFAULT_CONFIG_PATH = Path(__file__).parent / "production_config.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""
    pass


class ProductionConfig:
    """
    Configuration manager for the Production Tracker.

    Loads YAML configuration and provides typed access to all sections.
    Use get_config() to obtain the singleton instance.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: dict = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            raise ConfigurationError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

        if not isinstance(self._config, dict):
            raise ConfigurationError("Config file must contain a YAML mapping")

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._load()
        get_config.cache_clear()

    @property
    def version(self) -> str:
        """Configuration file version."""
        return self._config.get("version", "unknown")

    # =========================================================================
    # Performance Factor
    # =========================================================================

    @property
    def performance_factor(self) -> dict:
        """Performance factor configuration."""
        return self._config.get("performance_factor", {})

    @property
    def performance_thresholds(self) -> dict:
        """
        Status thresholds applied to the performance factor.

        Returns:
            Dict with 'on_track' and 'at_risk' lower bounds
        """
        return self.performance_factor.get("thresholds", {
            "on_track": 0.95,
            "at_risk": 0.80,
        })

    # =========================================================================
    # Component Rollup
    # =========================================================================

    @property
    def component_rollup(self) -> dict:
        """Component rollup configuration."""
        return self._config.get("component_rollup", {})

    @property
    def variance_thresholds(self) -> dict:
        """Inferred-rate / bid-rate ratio bounds for the variance flag."""
        return self.component_rollup.get("variance_thresholds", {
            "ahead": 1.10,
            "on_track": 0.90,
        })

    @property
    def recovery_rate_multiple(self) -> float:
        """Recovery is feasible only below this multiple of the bid rate."""
        return self.component_rollup.get("recovery_rate_multiple", 2.0)

    @property
    def narrative_tolerance_hours(self) -> float:
        """Overrun band (hours) reported as 'on track' in EAC narratives."""
        return self.component_rollup.get("narrative_tolerance_hours", 0.5)

    # =========================================================================
    # Materials
    # =========================================================================

    @property
    def materials(self) -> dict:
        """Material drawdown configuration."""
        return self._config.get("materials", {})

    @property
    def drawdown_decimals(self) -> int:
        """Decimal places drawdown quantities are rounded to."""
        return self.materials.get("drawdown_decimals", 2)

    # =========================================================================
    # UI Configuration
    # =========================================================================

    @property
    def ui(self) -> dict:
        """UI configuration."""
        return self._config.get("ui", {})

    @property
    def currency_config(self) -> dict:
        """Currency formatting configuration."""
        return self.ui.get("currency", {
            "symbol": "$",
            "decimal_places": 2,
            "thousands_separator": ","
        })

    # =========================================================================
    # Logging
    # =========================================================================

    @property
    def logging(self) -> dict:
        """Logging configuration."""
        return self._config.get("logging", {})

    @property
    def log_level(self) -> str:
        return str(self.logging.get("level", "INFO")).upper()

    @property
    def log_format(self) -> str:
        return self.logging.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a top-level config value by key."""
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to config."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        return key in self._config


@lru_cache(maxsize=1)
def get_config(config_path: Optional[str] = None) -> ProductionConfig:
    """
    Get the singleton configuration instance.

    Args:
        config_path: Optional path to config file. Only used on first call.

    Returns:
        ProductionConfig singleton instance
    """
    path = Path(config_path) if config_path else None
    return ProductionConfig(path)


def reload_config() -> ProductionConfig:
    """Reload configuration from disk and return new instance."""
    get_config.cache_clear()
    return get_config()
