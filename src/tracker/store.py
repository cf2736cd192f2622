"""Incident Store — ordered collection with index and id lookup.

Not thread-safe on its own; ``SecurityCore`` serialises every call.
"""

from __future__ import annotations

import logging

from src.contracts.errors import NotFoundError
from src.contracts.incident import Incident

log = logging.getLogger(__name__)


class IncidentStore:
    """Insertion-ordered incidents; id uniqueness is left to the caller."""

    def __init__(self) -> None:
        self._incidents: list[Incident] = []

    def __len__(self) -> int:
        return len(self._incidents)

    def add(self, incident: Incident) -> None:
        self._incidents.append(incident)
        log.debug("Store: added %s (%d total)", incident.incident_id, len(self._incidents))

    def all(self) -> tuple[Incident, ...]:
        """Snapshot of the current contents; later appends do not show up."""
        return tuple(self._incidents)

    def find_by_id(self, incident_id: str) -> Incident | None:
        """Case-insensitive id match; the first match wins."""
        wanted = incident_id.strip().casefold()
        for inc in self._incidents:
            if inc.incident_id.casefold() == wanted:
                return inc
        return None

    def find_by_index(self, n: int) -> Incident:
        """Return the *n*-th incident (1-based)."""
        if not 1 <= n <= len(self._incidents):
            raise NotFoundError(
                f"Incident #{n} out of range (1..{len(self._incidents)})"
            )
        return self._incidents[n - 1]
