"""Error taxonomy raised by the incident core.

Every failure here is a caller input problem; nothing is retryable.
"""

from __future__ import annotations


class IncidentError(Exception):
    """Base class for all errors raised by the core."""


class ValidationError(IncidentError, ValueError):
    """Bad constructor/update input or an illegal status transition."""


class NotFoundError(IncidentError, LookupError):
    """Lookup miss by list index or incident id."""
