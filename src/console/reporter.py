"""Text rendering for the console: dashboard, incident details, security report, CSV export."""

from __future__ import annotations

import logging
import os
import tempfile
from collections import Counter
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from src.contracts.enums import IncidentStatus, Severity, ThreatType
from src.contracts.incident import Incident
from src.contracts.scoring import IMMEDIATE_RISK_THRESHOLD
from src.shared.clock import elapsed_text
from src.tracker.metrics import SystemMetrics

log = logging.getLogger(__name__)

TOP_THREATS = 3

_SEVERITY_ICON = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟠",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🟢",
}


def _replace_atomically(target: Path, content: str) -> None:
    """Stage *content* beside *target* and swap it in with one rename.

    Readers see either the previous export or the complete new one.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="",
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    ) as staged:
        staging = Path(staged.name)
        try:
            staged.write(content)
            staged.flush()
            os.fsync(staged.fileno())
        except BaseException:
            staged.close()
            staging.unlink(missing_ok=True)
            raise
    try:
        staging.replace(target)
    except OSError:
        staging.unlink(missing_ok=True)
        raise


def write_incidents_csv(incidents: Sequence[Incident], path: str | Path) -> Path:
    """Export *incidents* in store order, one CSV row each. Returns the written path."""
    target = Path(path)
    rows = [Incident.csv_header(), *(inc.to_csv_row() for inc in incidents)]
    _replace_atomically(target, "\n".join(rows) + "\n")
    log.info("Exported %d incidents to %s", len(incidents), target)
    return target


# ═══════════════════════════════════════════════════════════════════════════
#  Dashboard
# ═══════════════════════════════════════════════════════════════════════════


def render_dashboard(
    m: SystemMetrics,
    incidents: Sequence[Incident],
    alerts: Sequence[str],
    now: datetime,
) -> str:
    lines: list[str] = ["=== CYBERSECURITY INCIDENT RESPONSE CONSOLE ===", ""]

    lines.append("🛡️  SYSTEM STATUS:")
    lines.append(f"   ├─ Active Incidents: {m.active_count} Open, {m.resolved_count} Resolved Today")
    lines.append(f"   ├─ Threat Level: {m.threat_band} (Score: {m.mean_threat_level:.1f}/10)")
    lines.append(f"   ├─ Network Health: {m.network_health}% ({m.anomalies} anomalies detected)")
    lines.append(f"   └─ Last Scan: {elapsed_text(m.last_refreshed, now)} ago")
    lines.append("")

    lines.append("📊 RECENT THREATS:")
    top = sorted(
        (i for i in incidents if i.status is IncidentStatus.OPEN),
        key=lambda i: i.risk_score,
        reverse=True,
    )[:TOP_THREATS]
    if not top:
        lines.append("   No active threats detected")
    for inc in top:
        icon = _SEVERITY_ICON.get(inc.severity, "⚪")
        lines.append(f"   {icon}[{inc.severity.display_name.upper()}] {inc.threat_type.display_name}")
        lines.append(f"   │ Source: {inc.source_address} → Target: {inc.target_address}")
        lines.append(
            f"   │ Risk Score: {inc.risk_score:.1f}/10 | Time: {inc.updated_at:%H:%M:%S}"
        )
        if inc.recommended_actions:
            lines.append(f"   │ Actions: {inc.recommended_actions[0]}")
        lines.append("")

    if alerts:
        lines.append("")
        lines.append("🚨 ALERTS:")
        lines.extend(f"         {a}" for a in alerts)

    return "\n".join(lines)


def render_incident_list(incidents: Sequence[Incident]) -> str:
    return "\n".join(
        f"{n}. {inc.incident_id} - {inc.threat_type.display_name} "
        f"({inc.status.display_name}) - Risk: {inc.risk_score:.1f}/10"
        for n, inc in enumerate(incidents, 1)
    )


def render_incident_details(inc: Incident) -> str:
    lines = [
        "",
        "=== SECURITY INCIDENT DETAILS ===",
        f"ID: {inc.incident_id}",
        f"Status: {inc.status.display_name}",
        f"Severity: {inc.severity.display_name}",
        f"Threat Type: {inc.threat_type.display_name}",
        f"Risk Score: {inc.risk_score:.1f}/10",
        f"Timestamp: {inc.updated_at.isoformat(timespec='seconds')}",
        f"Source IP: {inc.source_address}",
        f"Target IP: {inc.target_address}",
        f"Description: {inc.description}",
        f"Requires Immediate Action: {'YES' if inc.requires_immediate_action else 'NO'}",
        "",
        "Recommended Actions:",
    ]
    lines.extend(f"  {n}. {a}" for n, a in enumerate(inc.recommended_actions, 1))
    lines.append("================================")
    return "\n".join(lines)


# ═══════════════════════════════════════════════════════════════════════════
#  Security report
# ═══════════════════════════════════════════════════════════════════════════


def resolution_rate(incidents: Sequence[Incident]) -> float:
    """Percentage of incidents in RESOLVED; 0.0 for an empty list."""
    if not incidents:
        return 0.0
    resolved = sum(1 for i in incidents if i.status is IncidentStatus.RESOLVED)
    return resolved / len(incidents) * 100


def high_risk(incidents: Sequence[Incident]) -> list[Incident]:
    return sorted(
        (i for i in incidents if i.risk_score >= IMMEDIATE_RISK_THRESHOLD),
        key=lambda i: i.risk_score,
        reverse=True,
    )


def render_security_report(incidents: Sequence[Incident], now: datetime) -> str:
    by_status = Counter(i.status for i in incidents)
    by_threat = Counter(i.threat_type for i in incidents)
    by_severity = Counter(i.severity for i in incidents)

    lines: list[str] = [
        "=== SECURITY REPORT ===",
        f"Generated: {now:%Y-%m-%d %H:%M:%S}",
        "",
        "📈 INCIDENT STATISTICS:",
        f"   Total Incidents: {len(incidents)}",
        f"   Open Incidents: {by_status[IncidentStatus.OPEN]}",
        f"   Resolved Incidents: {by_status[IncidentStatus.RESOLVED]}",
        f"   Resolution Rate: {resolution_rate(incidents):.1f}%",
        "",
        "🎯 THREAT TYPE BREAKDOWN:",
    ]
    lines.extend(f"   {t.display_name}: {by_threat[t]}" for t in ThreatType)
    lines.append("")
    lines.append("⚠️  SEVERITY BREAKDOWN:")
    lines.extend(f"   {s.display_name}: {by_severity[s]}" for s in Severity)
    lines.append("")

    lines.append(f"🚨 HIGH-RISK INCIDENTS (Risk Score >= {IMMEDIATE_RISK_THRESHOLD:.1f}):")
    risky = high_risk(incidents)
    if not risky:
        lines.append("   No high-risk incidents found.")
    for inc in risky:
        lines.append(
            f"   {inc.incident_id} - {inc.threat_type.display_name} - Risk: {inc.risk_score:.1f}/10"
        )

    return "\n".join(lines)
