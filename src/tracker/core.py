"""SecurityCore — the operations the console layer calls.

All shared state (store, alert feed, cached metrics snapshot) sits behind
one re-entrant lock, held for the whole of each operation, so the monitor
thread never observes the store mid-append or a half-built snapshot.
"""

from __future__ import annotations

import logging
import random
import threading

from src.contracts.enums import IncidentStatus, Severity, ThreatType
from src.contracts.errors import NotFoundError
from src.contracts.incident import Incident, IncidentSpec
from src.shared.clock import Clock, utc_now
from src.shared.seed import init_rng
from src.tracker import metrics
from src.tracker.alerts import AlertFeed
from src.tracker.metrics import SystemMetrics
from src.tracker.monitor import Monitor
from src.tracker.settings import Settings
from src.tracker.store import IncidentStore

log = logging.getLogger(__name__)


class SecurityCore:
    def __init__(
        self,
        settings: Settings | None = None,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.clock = clock
        self._lock = threading.RLock()
        self._store = IncidentStore()
        self._alerts = AlertFeed(
            rng=rng if rng is not None else init_rng(self.settings.seed),
            probability=self.settings.alert_probability,
            capacity=self.settings.alert_capacity,
            catalog=self.settings.alert_catalog,
        )
        self._metrics = metrics.compute((), self.clock())

    # ── incidents ─────────────────────────────────────────────────────────

    def create_incident(
        self,
        incident_id: str,
        source_address: str,
        target_address: str,
        threat_type: ThreatType | str,
        severity: Severity | str,
        description: str,
    ) -> Incident:
        """Validate and register a new incident. Raises ValidationError."""
        incident = (
            IncidentSpec()
            .incident_id(incident_id)
            .source(source_address)
            .target(target_address)
            .threat_type(threat_type)
            .severity(severity)
            .description(description)
            .build(clock=self.clock)
        )
        with self._lock:
            self._store.add(incident)
            self._refresh_locked()
        log.info(
            "Incident %s created: %s/%s risk=%.1f immediate=%s",
            incident.incident_id,
            incident.threat_type.value,
            incident.severity.value,
            incident.risk_score,
            incident.requires_immediate_action,
        )
        return incident

    def list_incidents(self) -> tuple[Incident, ...]:
        with self._lock:
            return self._store.all()

    def find_incident(self, selector: int | str) -> Incident:
        """Look up by 1-based index or by id (case-insensitive).

        An all-digit string is tried as an index first and falls back to an
        id match, so numeric ids stay reachable.
        """
        with self._lock:
            if isinstance(selector, int):
                return self._store.find_by_index(selector)
            text = str(selector).strip()
            if text.isdigit():
                try:
                    return self._store.find_by_index(int(text))
                except NotFoundError:
                    pass
            found = self._store.find_by_id(text)
        if found is None:
            raise NotFoundError(f"Incident not found: {selector!r}")
        return found

    def update_status(self, incident: Incident, new_status: IncidentStatus | str) -> None:
        """Apply a status transition. Raises ValidationError."""
        with self._lock:
            incident.update_status(new_status, clock=self.clock)
            self._refresh_locked()

    # ── aggregate view ───────────────────────────────────────────────────

    def current_metrics(self) -> SystemMetrics:
        """Latest snapshot (refreshed on every tick and every mutation)."""
        with self._lock:
            return self._metrics

    def refresh_metrics(self) -> SystemMetrics:
        with self._lock:
            return self._refresh_locked()

    def recent_alerts(self) -> tuple[str, ...]:
        with self._lock:
            return self._alerts.recent()

    def generate_alert(self) -> str | None:
        with self._lock:
            return self._alerts.try_generate()

    def _refresh_locked(self) -> SystemMetrics:
        self._metrics = metrics.compute(self._store.all(), self.clock())
        return self._metrics

    # ── monitoring ────────────────────────────────────────────────────────

    def tick(self) -> None:
        """One monitor firing: metrics refresh, then an alert draw."""
        self.refresh_metrics()
        self.generate_alert()

    def start_monitoring(self, interval_sec: float | None = None) -> Monitor:
        handle = Monitor(self.tick, interval_sec or self.settings.interval_sec)
        handle.start()
        return handle

    def stop_monitoring(self, handle: Monitor) -> None:
        handle.stop()
