"""Canonical enumerations for the incident model."""

from __future__ import annotations

import re
from enum import Enum

from src.contracts.errors import ValidationError


def _norm(text: str) -> str:
    return re.sub(r"[\s_-]+", "", text).lower()


class _Labeled(str, Enum):
    """String enum with a human-readable label and lenient parsing."""

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, raw: object) -> _Labeled:
        """Resolve *raw* by member, name, value or display name (case-insensitive)."""
        if isinstance(raw, cls):
            return raw
        if raw is None:
            raise ValidationError(f"{cls.__name__} cannot be empty")
        key = _norm(str(raw))
        for member in cls:
            if key in (_norm(member.name), _norm(member.value), _norm(member.display_name)):
                return member
        raise ValidationError(f"Unknown {cls.__name__}: {raw!r}")

    def __str__(self) -> str:
        return self.display_name


class ThreatType(_Labeled):
    MALWARE = "malware"
    UNAUTHORIZED_ACCESS = "unauthorized_access"
    DOS_ATTACK = "denial_of_service"
    PHISHING = "phishing"
    DATA_BREACH = "data_breach"
    PORT_SCAN = "port_scan"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"


class Severity(_Labeled):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        return _SEVERITY_LEVELS[self]

    def is_higher_than(self, other: Severity) -> bool:
        return self.level > other.level


class IncidentStatus(_Labeled):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    ESCALATED = "escalated"
    RESOLVED = "resolved"
    CLOSED = "closed"


_SEVERITY_LEVELS: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}

_DISPLAY_NAMES: dict[Enum, str] = {
    ThreatType.MALWARE: "Malware Detection",
    ThreatType.UNAUTHORIZED_ACCESS: "Unauthorized Access",
    ThreatType.DOS_ATTACK: "Denial of Service Attack",
    ThreatType.PHISHING: "Phishing Attempt",
    ThreatType.DATA_BREACH: "Data Breach",
    ThreatType.PORT_SCAN: "Port Scanning",
    ThreatType.SUSPICIOUS_ACTIVITY: "Suspicious Activity",
    Severity.LOW: "Low",
    Severity.MEDIUM: "Medium",
    Severity.HIGH: "High",
    Severity.CRITICAL: "Critical",
    IncidentStatus.OPEN: "Open",
    IncidentStatus.IN_PROGRESS: "In Progress",
    IncidentStatus.ESCALATED: "Escalated",
    IncidentStatus.RESOLVED: "Resolved",
    IncidentStatus.CLOSED: "Closed",
}
