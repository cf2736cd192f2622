"""Incident contract — the entity model shared by tracker and console."""

from src.contracts.enums import IncidentStatus, Severity, ThreatType
from src.contracts.errors import IncidentError, NotFoundError, ValidationError
from src.contracts.incident import Incident, IncidentSpec

__all__ = [
    "Incident",
    "IncidentError",
    "IncidentSpec",
    "IncidentStatus",
    "NotFoundError",
    "Severity",
    "ThreatType",
    "ValidationError",
]
