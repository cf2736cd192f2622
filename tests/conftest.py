"""Shared fixtures for incident response console tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from src.contracts.enums import Severity, ThreatType
from src.contracts.incident import Incident
from src.tracker.core import SecurityCore
from src.tracker.settings import Settings

BASE_TS = datetime(2026, 2, 26, 10, 0, 0, tzinfo=UTC)


# ── Helper: create Incident with sensible defaults ──────────────────────


def make_incident(
    *,
    incident_id: str = "INC-001",
    source_address: str = "1.2.3.4",
    target_address: str = "10.0.0.1",
    threat_type: ThreatType = ThreatType.MALWARE,
    severity: Severity = Severity.HIGH,
    description: str = "test incident",
    updated_at: datetime = BASE_TS,
) -> Incident:
    return Incident(
        incident_id=incident_id,
        source_address=source_address,
        target_address=target_address,
        threat_type=threat_type,
        severity=severity,
        description=description,
        updated_at=updated_at,
    )


class FixedClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime = BASE_TS) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


class ScriptedRng:
    """Stand-in for random.Random replaying fixed draws.

    ``rolls`` feed ``random()``; ``picks`` are indices used by ``choice()``.
    """

    def __init__(self, rolls: list[float], picks: list[int] | None = None) -> None:
        self.rolls = list(rolls)
        self.picks = list(picks or [])

    def random(self) -> float:
        return self.rolls.pop(0)

    def choice(self, seq):
        return seq[self.picks.pop(0)]


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def core(clock) -> SecurityCore:
    return SecurityCore(Settings(seed=42), clock=clock)


@pytest.fixture
def populated_core(core) -> SecurityCore:
    """Core with one incident of every threat type at MEDIUM severity."""
    for n, threat in enumerate(ThreatType, 1):
        core.create_incident(
            f"INC-{n:03d}", "192.0.2.10", "10.0.0.5", threat, Severity.MEDIUM, f"{threat.value} seen"
        )
    return core
