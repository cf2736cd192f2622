"""Incident data-class — one tracked security event and its lifecycle."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime

from src.contracts import scoring
from src.contracts.enums import IncidentStatus, Severity, ThreatType
from src.contracts.errors import ValidationError
from src.shared.clock import Clock, utc_now

log = logging.getLogger(__name__)

INCIDENT_CSV_COLUMNS = [
    "incident_id",
    "source_address",
    "target_address",
    "threat_type",
    "severity",
    "status",
    "risk_score",
    "requires_immediate_action",
    "updated_at",
    "description",
    "recommended_actions",
]

_REQUIRED_TEXT = (
    ("incident_id", "Incident ID"),
    ("source_address", "Source IP"),
    ("target_address", "Target IP"),
    ("description", "Description"),
)


@dataclass(frozen=True, slots=True, eq=False)
class Incident:
    """A security incident with derived risk and response fields.

    Instances reject attribute assignment.  Identity fields (id, addresses,
    threat_type, severity, description) are fixed at construction;
    ``status`` and ``updated_at`` change only through :meth:`update_status`.
    ``risk_score``, ``recommended_actions`` and ``requires_immediate_action``
    are derived and never passed in.
    """

    incident_id: str
    source_address: str
    target_address: str
    threat_type: ThreatType
    severity: Severity
    description: str
    updated_at: datetime = field(default_factory=utc_now)
    status: IncidentStatus = field(init=False, default=IncidentStatus.OPEN)
    risk_score: float = field(init=False, default=0.0)
    recommended_actions: tuple[str, ...] = field(init=False, default=())
    requires_immediate_action: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        for attr, label in _REQUIRED_TEXT:
            value = getattr(self, attr)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{label} cannot be null or empty")
            if not isinstance(value, str):
                raise ValidationError(f"{label} must be a string, got {type(value).__name__}")
        if self.threat_type is None:
            raise ValidationError("Threat type cannot be null")
        if self.severity is None:
            raise ValidationError("Severity level cannot be null")
        self._assign(
            threat_type=ThreatType.parse(self.threat_type),
            severity=Severity.parse(self.severity),
        )
        self._recompute()

    # ── lifecycle ─────────────────────────────────────────────────────────

    def update_status(self, new_status: IncidentStatus, clock: Clock = utc_now) -> None:
        """Move to *new_status*; RESOLVED → OPEN is the only forbidden edge."""
        if new_status is None:
            raise ValidationError("Status cannot be null")
        new_status = IncidentStatus.parse(new_status)
        if self.status is IncidentStatus.RESOLVED and new_status is IncidentStatus.OPEN:
            raise ValidationError("Cannot reopen a resolved incident")

        previous = self.status
        self._assign(status=new_status, updated_at=clock())
        # Status does not feed the score; recomputation is idempotent.
        self._recompute()
        log.info("Incident %s: %s -> %s", self.incident_id, previous.value, new_status.value)

    def _recompute(self) -> None:
        score = scoring.risk_score(self.threat_type, self.severity)
        self._assign(
            risk_score=score,
            recommended_actions=scoring.response_actions(self.threat_type, self.severity),
            requires_immediate_action=scoring.requires_immediate_action(
                self.threat_type, self.severity, score
            ),
        )

    def _assign(self, **values: object) -> None:
        # the only write path past the frozen guard
        for name, value in values.items():
            object.__setattr__(self, name, value)

    # ── identity ──────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Incident):
            return NotImplemented
        return self.incident_id == other.incident_id

    def __hash__(self) -> int:
        return hash(self.incident_id)

    def __str__(self) -> str:
        return (
            f"Incident{{id='{self.incident_id}', type={self.threat_type.display_name}, "
            f"severity={self.severity.display_name}, risk={self.risk_score:.1f}}}"
        )

    # ── serialisation ────────────────────────────────────────────────────

    def to_csv_row(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(
            [
                self.incident_id,
                self.source_address,
                self.target_address,
                self.threat_type.value,
                self.severity.value,
                self.status.value,
                f"{self.risk_score:.1f}",
                str(self.requires_immediate_action).lower(),
                self.updated_at.isoformat(),
                self.description,
                "; ".join(self.recommended_actions),
            ]
        )
        return buf.getvalue().rstrip("\r\n")

    @staticmethod
    def csv_header() -> str:
        return ",".join(INCIDENT_CSV_COLUMNS)


@dataclass
class IncidentSpec:
    """Mutable builder for :class:`Incident`; validated only in :meth:`build`.

    Setters return ``self`` so a spec can be filled fluently::

        IncidentSpec().incident_id("INC-1").source("1.2.3.4")...build()
    """

    id: str | None = None
    source_address: str | None = None
    target_address: str | None = None
    threat: ThreatType | None = None
    level: Severity | None = None
    text: str | None = None

    def incident_id(self, value: str) -> IncidentSpec:
        self.id = value
        return self

    def source(self, value: str) -> IncidentSpec:
        self.source_address = value
        return self

    def target(self, value: str) -> IncidentSpec:
        self.target_address = value
        return self

    def threat_type(self, value: ThreatType) -> IncidentSpec:
        self.threat = value
        return self

    def severity(self, value: Severity) -> IncidentSpec:
        self.level = value
        return self

    def description(self, value: str) -> IncidentSpec:
        self.text = value
        return self

    def build(self, clock: Clock = utc_now) -> Incident:
        return Incident(
            incident_id=self.id,
            source_address=self.source_address,
            target_address=self.target_address,
            threat_type=self.threat,
            severity=self.level,
            description=self.text,
            updated_at=clock(),
        )
