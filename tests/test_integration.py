"""End-to-end: create → score → transition → aggregate view."""

from __future__ import annotations

import pytest

from src.contracts.enums import IncidentStatus, Severity, ThreatType
from src.contracts.errors import ValidationError
from src.tracker.core import SecurityCore
from src.tracker.settings import Settings
from tests.conftest import ScriptedRng


class TestIncidentLifecycle:
    """Full flow through the SecurityCore facade."""

    def test_malware_high_lifecycle(self, core):
        inc = core.create_incident("INC-1", "1.2.3.4", "10.0.0.1", ThreatType.MALWARE, Severity.HIGH, "test")
        assert inc.status is IncidentStatus.OPEN
        assert inc.risk_score == 10.0
        assert inc.requires_immediate_action is True

        m = core.current_metrics()
        assert (m.active_count, m.mean_threat_level, m.network_health) == (1, 10.0, 98)
        assert m.threat_band == "CRITICAL"

        core.update_status(inc, IncidentStatus.RESOLVED)
        assert inc.status is IncidentStatus.RESOLVED

        with pytest.raises(ValidationError):
            core.update_status(inc, IncidentStatus.OPEN)

        m = core.current_metrics()
        assert (m.active_count, m.resolved_count, m.network_health) == (0, 1, 100)

    def test_actions_encapsulated_through_facade(self, core):
        core.create_incident("INC-1", "a", "b", ThreatType.PORT_SCAN, Severity.CRITICAL, "port sweep")
        actions = list(core.find_incident("INC-1").recommended_actions)
        actions.pop(0)
        again = core.find_incident(1).recommended_actions
        assert len(again) == 6
        assert again[0] == "ACTIVATE INCIDENT RESPONSE TEAM"


class TestMonitorFlow:
    def test_ticks_fill_alert_buffer(self, clock):
        rng = ScriptedRng(rolls=[0.1, 0.5, 0.1, 0.1, 0.1], picks=[0, 0, 1, 2])
        core = SecurityCore(Settings(), clock=clock, rng=rng)
        core.create_incident("INC-1", "a", "b", ThreatType.PHISHING, Severity.MEDIUM, "lure")

        for _ in range(5):
            clock.advance(30)
            core.tick()

        # hit, miss, duplicate, hit, hit
        assert core.recent_alerts() == (
            "Port scan detected from external IP",
            "Unusual data transfer on port 443",
            "Failed authentication attempts increased",
        )
        m = core.current_metrics()
        assert m.active_count == 1
        assert m.mean_threat_level == 6.0
        assert m.last_refreshed == clock()
