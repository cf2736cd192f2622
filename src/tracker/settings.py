"""Runtime settings — read ``console.yaml`` and validate.

Layout
──────
    monitor:
      interval_sec: 30
    alerts:
      probability: 0.3
      capacity: 3
      catalog: [...]
    seed: null
    log_level: INFO
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from src.contracts.errors import ValidationError
from src.shared.config_loader import load_yaml
from src.tracker.alerts import DEFAULT_CAPACITY, DEFAULT_CATALOG, DEFAULT_PROBABILITY
from src.tracker.monitor import DEFAULT_INTERVAL_SEC

log = logging.getLogger(__name__)

CONFIG_FILENAME = "console.yaml"


@dataclass(frozen=True)
class Settings:
    interval_sec: float = DEFAULT_INTERVAL_SEC
    alert_probability: float = DEFAULT_PROBABILITY
    alert_capacity: int = DEFAULT_CAPACITY
    alert_catalog: tuple[str, ...] = field(default=DEFAULT_CATALOG)
    seed: int | None = None
    log_level: str = "INFO"

    def validate(self) -> Settings:
        if self.interval_sec <= 0:
            raise ValidationError(f"monitor.interval_sec must be positive, got {self.interval_sec}")
        if not 0.0 <= self.alert_probability <= 1.0:
            raise ValidationError(
                f"alerts.probability must be within [0, 1], got {self.alert_probability}"
            )
        if self.alert_capacity < 1:
            raise ValidationError(f"alerts.capacity must be positive, got {self.alert_capacity}")
        if not self.alert_catalog:
            raise ValidationError("alerts.catalog cannot be empty")
        return self

    def override(self, **changes: Any) -> Settings:
        """Return a copy with every non-None keyword applied."""
        applied = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **applied).validate()


def settings_from_dict(cfg: dict[str, Any]) -> Settings:
    monitor = cfg.get("monitor") or {}
    alerts = cfg.get("alerts") or {}
    catalog = alerts.get("catalog")
    try:
        s = Settings(
            interval_sec=float(monitor.get("interval_sec", DEFAULT_INTERVAL_SEC)),
            alert_probability=float(alerts.get("probability", DEFAULT_PROBABILITY)),
            alert_capacity=int(alerts.get("capacity", DEFAULT_CAPACITY)),
            alert_catalog=tuple(str(a) for a in catalog) if catalog is not None else DEFAULT_CATALOG,
            seed=int(cfg["seed"]) if cfg.get("seed") is not None else None,
            log_level=str(cfg.get("log_level", "INFO")).upper(),
        )
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid settings: {exc}") from exc
    return s.validate()


def load_settings(config_dir: str | Path = "config") -> Settings:
    """Load ``<config_dir>/console.yaml``; a missing file means defaults."""
    path = Path(config_dir) / CONFIG_FILENAME
    s = settings_from_dict(load_yaml(path, required=False))
    log.info(
        "Settings: interval=%.1fs, alert_probability=%.2f, capacity=%d, seed=%s",
        s.interval_sec,
        s.alert_probability,
        s.alert_capacity,
        s.seed,
    )
    return s
