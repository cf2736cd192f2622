"""Risk scoring and response playbooks.

Score model
───────────
    risk_score = clamp(BASE_SCORES[threat] × SEVERITY_MULTIPLIERS[severity], 0.0, 10.0)

    The score is a pure function of ``(threat_type, severity)``; incident
    status never feeds it.

Immediate action
────────────────
    An incident needs immediate action when any of these holds:
      * severity is CRITICAL
      * risk_score >= 8.0
      * threat_type is UNAUTHORIZED_ACCESS, DATA_BREACH or MALWARE
"""

from __future__ import annotations

from src.contracts.enums import Severity, ThreatType

MIN_RISK_SCORE = 0.0
MAX_RISK_SCORE = 10.0
IMMEDIATE_RISK_THRESHOLD = 8.0

BASE_SCORES: dict[ThreatType, float] = {
    ThreatType.MALWARE: 8.0,
    ThreatType.UNAUTHORIZED_ACCESS: 9.0,
    ThreatType.DOS_ATTACK: 7.0,
    ThreatType.PHISHING: 6.0,
    ThreatType.DATA_BREACH: 9.5,
    ThreatType.PORT_SCAN: 4.0,
    ThreatType.SUSPICIOUS_ACTIVITY: 5.0,
}

SEVERITY_MULTIPLIERS: dict[Severity, float] = {
    Severity.LOW: 0.5,
    Severity.MEDIUM: 1.0,
    Severity.HIGH: 1.5,
    Severity.CRITICAL: 2.0,
}

IMMEDIATE_THREATS: frozenset[ThreatType] = frozenset(
    {ThreatType.UNAUTHORIZED_ACCESS, ThreatType.DATA_BREACH, ThreatType.MALWARE}
)

# Prepended (in this order) for CRITICAL incidents.
CRITICAL_PREAMBLE: tuple[str, ...] = (
    "ACTIVATE INCIDENT RESPONSE TEAM",
    "Initiate emergency procedures",
)

RESPONSE_PLAYBOOK: dict[ThreatType, tuple[str, ...]] = {
    ThreatType.MALWARE: (
        "Isolate affected system immediately",
        "Initiate full system scan",
        "Update antivirus signatures",
        "Notify IT security team",
    ),
    ThreatType.UNAUTHORIZED_ACCESS: (
        "Lock compromised accounts",
        "Change affected passwords",
        "Review access logs",
        "Enable additional authentication",
    ),
    ThreatType.DOS_ATTACK: (
        "Activate DDoS protection",
        "Block source IP addresses",
        "Scale up server resources",
        "Monitor network traffic",
    ),
    ThreatType.PHISHING: (
        "Block phishing URLs",
        "Send security awareness alert",
        "Review email security settings",
        "Monitor for credential theft",
    ),
    ThreatType.DATA_BREACH: (
        "Secure affected systems",
        "Assess data exposure scope",
        "Notify legal and compliance teams",
        "Prepare incident report",
    ),
    ThreatType.PORT_SCAN: (
        "Monitor for follow-up attacks",
        "Review firewall rules",
        "Block scanning IP if persistent",
        "Update intrusion detection rules",
    ),
    ThreatType.SUSPICIOUS_ACTIVITY: (
        "Investigate activity patterns",
        "Review user permissions",
        "Monitor for escalation",
        "Update security policies",
    ),
}


def risk_score(threat_type: ThreatType, severity: Severity) -> float:
    """Return the clamped 0–10 risk score for a threat/severity pair."""
    raw = BASE_SCORES[threat_type] * SEVERITY_MULTIPLIERS[severity]
    return min(MAX_RISK_SCORE, max(MIN_RISK_SCORE, raw))


def requires_immediate_action(
    threat_type: ThreatType,
    severity: Severity,
    score: float,
) -> bool:
    if severity is Severity.CRITICAL:
        return True
    if score >= IMMEDIATE_RISK_THRESHOLD:
        return True
    return threat_type in IMMEDIATE_THREATS


def response_actions(threat_type: ThreatType, severity: Severity) -> tuple[str, ...]:
    """Return the ordered action list for a threat, escalated for CRITICAL."""
    actions = RESPONSE_PLAYBOOK[threat_type]
    if severity is Severity.CRITICAL:
        return CRITICAL_PREAMBLE + actions
    return actions
