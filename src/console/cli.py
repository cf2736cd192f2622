"""CLI entry-point for the incident response console.

Usage examples
--------------
# Interactive console with defaults from config/console.yaml:
incident-console

# Faster monitor ticks and reproducible alert draws:
incident-console --interval-sec 5 --seed 7

# Custom target for the [E]xport command:
incident-console --export-csv out/incidents.csv
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import TypeVar

from src.console import reporter
from src.contracts.enums import IncidentStatus, Severity, ThreatType
from src.contracts.errors import IncidentError, ValidationError
from src.contracts.incident import Incident
from src.shared.logger import setup_logging
from src.tracker.core import SecurityCore
from src.tracker.settings import load_settings

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

MENU = "Options: [R]eport Incident [A]nalyze [S]ecurity Report [E]xport CSV [H]elp [Q]uit"

HELP_TEXT = """=== HELP - CYBERSECURITY INCIDENT RESPONSE CONSOLE ===

Available Commands:
  R - Report Incident: Create a new security incident
  A - Analyze: View and manage existing incidents
  S - Security Report: Generate comprehensive security statistics
  E - Export CSV: Write all incidents to a CSV file
  H - Help: Show this help information
  Q - Quit: Exit the application

System Features:
  • Real-time threat monitoring
  • Automated risk scoring (0-10 scale)
  • Intelligent response suggestions
  • Comprehensive incident tracking
  • Security metrics and reporting

Threat Types Supported:"""


class Console:
    """Menu loop over a :class:`SecurityCore`.

    ``read`` and ``write`` default to ``input``/``print``; tests pass
    scripted replacements.
    """

    def __init__(
        self,
        core: SecurityCore,
        read: Callable[[str], str] | None = None,
        write: Callable[[str], None] | None = None,
        export_path: str = "out/incidents.csv",
    ) -> None:
        self.core = core
        self.read = read or input
        self.write = write or print
        self.export_path = export_path
        self._commands: dict[str, Callable[[], None]] = {
            "R": self.report_incident,
            "A": self.analyze,
            "S": self.security_report,
            "E": self.export_csv,
            "H": self.show_help,
        }

    def run(self) -> None:
        while True:
            self.show_dashboard()
            self.write(MENU)
            try:
                choice = self.read("> ").strip().upper()
            except EOFError:
                choice = "Q"
            if choice == "Q":
                self.write("Shutting down security console...")
                return
            handler = self._commands.get(choice)
            if handler is None:
                self.write("Invalid option. Type 'H' for help.")
                continue
            try:
                handler()
            except (IncidentError, ValueError, OSError) as exc:
                log.debug("Command %s failed: %s", choice, exc)
                self.write(f"❌ Error: {exc}")
            except EOFError:
                self.write("Shutting down security console...")
                return

    # ── screens ───────────────────────────────────────────────────────────

    def show_dashboard(self) -> None:
        self.write(
            reporter.render_dashboard(
                self.core.current_metrics(),
                self.core.list_incidents(),
                self.core.recent_alerts(),
                self.core.clock(),
            )
        )

    def show_help(self) -> None:
        self.write(HELP_TEXT)
        for t in ThreatType:
            self.write(f"  • {t.display_name}")

    def security_report(self) -> None:
        self.write(reporter.render_security_report(self.core.list_incidents(), self.core.clock()))

    def export_csv(self) -> None:
        incidents = self.core.list_incidents()
        reporter.write_incidents_csv(incidents, self.export_path)
        self.write(f"✅ Exported {len(incidents)} incidents to {self.export_path}")

    # ── commands ──────────────────────────────────────────────────────────

    def report_incident(self) -> None:
        self.write("=== REPORT NEW SECURITY INCIDENT ===")
        incident_id = self.read("Enter Incident ID: ").strip()
        source = self.read("Enter Source IP: ").strip()
        target = self.read("Enter Target IP: ").strip()
        threat = self._choose("Select Threat Type:", ThreatType)
        severity = self._choose("Select Severity Level:", Severity)
        description = self.read("Enter Description: ").strip()

        incident = self.core.create_incident(
            incident_id, source, target, threat, severity, description
        )
        self.write("✅ Incident reported successfully!")
        self.write(reporter.render_incident_details(incident))

    def analyze(self) -> None:
        self.write("=== INCIDENT ANALYSIS ===")
        incidents = self.core.list_incidents()
        if not incidents:
            self.write("No incidents to analyze.")
            return
        self.write("Select incident to analyze:")
        self.write(reporter.render_incident_list(incidents))

        selected = self.core.find_incident(self.read("Enter incident number or ID: "))
        self.write(reporter.render_incident_details(selected))
        if self.read("Update status? (y/n): ").strip().lower().startswith("y"):
            self.update_status(selected)

    def update_status(self, incident: Incident) -> None:
        status = self._choose("Select new status:", IncidentStatus)
        self.core.update_status(incident, status)
        self.write("✅ Status updated successfully!")

    def _choose(self, title: str, options: type[E]) -> E:
        members: Sequence[E] = list(options)
        self.write(title)
        for n, member in enumerate(members, 1):
            self.write(f"{n}. {member.display_name}")
        raw = self.read(f"Enter choice (1-{len(members)}): ").strip()
        if raw.isdigit():
            idx = int(raw)
            if not 1 <= idx <= len(members):
                raise ValidationError(f"Choice must be between 1 and {len(members)}, got {idx}")
            return members[idx - 1]
        return options.parse(raw)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="incident-console",
        description="Cybersecurity incident response console: track, score, monitor",
    )
    p.add_argument(
        "--config-dir",
        default="config",
        help="Directory with console.yaml. Default: config/",
    )
    p.add_argument(
        "--interval-sec",
        type=float,
        default=None,
        help="Monitor tick interval in seconds (overrides config, default 30).",
    )
    p.add_argument(
        "--alert-probability",
        type=float,
        default=None,
        help="Chance in [0, 1] that a tick raises an alert (overrides config).",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible alert draws.",
    )
    p.add_argument(
        "--export-csv",
        default="out/incidents.csv",
        help="Target path for the [E]xport command. Default: out/incidents.csv",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides config, default INFO).",
    )
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or "INFO")

    settings = load_settings(args.config_dir).override(
        interval_sec=args.interval_sec,
        alert_probability=args.alert_probability,
        seed=args.seed,
        log_level=args.log_level,
    )
    setup_logging(settings.log_level)

    core = SecurityCore(settings)
    handle = core.start_monitoring()
    try:
        Console(core, export_path=args.export_csv).run()
    except KeyboardInterrupt:
        print("\nInterrupted.")
    finally:
        core.stop_monitoring(handle)


if __name__ == "__main__":
    main()
