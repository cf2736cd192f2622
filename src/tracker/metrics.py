"""Metrics Aggregator — fleet-wide indicators derived from the Store.

Metrics computed per refresh
────────────────────────────
  active_count
      Incidents currently in status OPEN.

  resolved_count
      Incidents currently in status RESOLVED (CLOSED is not counted).

  mean_threat_level
      Arithmetic mean of ``risk_score`` over OPEN incidents; 0.0 when
      there are none.

  network_health
      ``max(50, 100 - 2 * active_count)``.

  last_refreshed
      Clock reading taken when the snapshot was computed.

Snapshots are rebuilt wholesale from one scan; nothing is updated
incrementally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from src.contracts.enums import IncidentStatus
from src.contracts.incident import Incident

log = logging.getLogger(__name__)

HEALTH_CEILING = 100
HEALTH_FLOOR = 50
HEALTH_PENALTY_PER_ACTIVE = 2

# (lower bound, band) checked top-down
_THREAT_BANDS: list[tuple[float, str]] = [
    (8.0, "CRITICAL"),
    (6.0, "HIGH"),
    (4.0, "MEDIUM"),
]


@dataclass(frozen=True, slots=True)
class SystemMetrics:
    """Immutable snapshot of the aggregate threat posture."""

    active_count: int
    resolved_count: int
    mean_threat_level: float
    network_health: int
    last_refreshed: datetime

    @property
    def threat_band(self) -> str:
        return threat_level_band(self.mean_threat_level)

    @property
    def anomalies(self) -> int:
        return HEALTH_CEILING - self.network_health


def threat_level_band(level: float) -> str:
    """Map a 0–10 threat level to CRITICAL / HIGH / MEDIUM / LOW."""
    for lower, band in _THREAT_BANDS:
        if level >= lower:
            return band
    return "LOW"


def network_health(active_count: int) -> int:
    return max(HEALTH_FLOOR, HEALTH_CEILING - HEALTH_PENALTY_PER_ACTIVE * active_count)


def compute(incidents: Iterable[Incident], now: datetime) -> SystemMetrics:
    """Scan *incidents* once and build a fresh snapshot stamped *now*."""
    active = 0
    resolved = 0
    open_risk_total = 0.0

    for inc in incidents:
        if inc.status is IncidentStatus.OPEN:
            active += 1
            open_risk_total += inc.risk_score
        elif inc.status is IncidentStatus.RESOLVED:
            resolved += 1

    mean_level = open_risk_total / active if active else 0.0

    m = SystemMetrics(
        active_count=active,
        resolved_count=resolved,
        mean_threat_level=mean_level,
        network_health=network_health(active),
        last_refreshed=now,
    )
    log.debug(
        "Metrics: active=%d, resolved=%d, threat=%.2f (%s), health=%d%%",
        m.active_count,
        m.resolved_count,
        m.mean_threat_level,
        m.threat_band,
        m.network_health,
    )
    return m
