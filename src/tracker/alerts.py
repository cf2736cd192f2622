"""Alert Feed — bounded buffer of recent synthetic alerts.

The generator stands in for an external detector: on each draw it fires
with probability ``probability`` and picks one canned message uniformly.
Duplicates of a message already buffered are dropped; once the buffer
holds more than ``capacity`` entries the oldest is evicted.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Sequence

from src.contracts.errors import ValidationError

log = logging.getLogger(__name__)

DEFAULT_PROBABILITY = 0.3
DEFAULT_CAPACITY = 3
DEFAULT_CATALOG: tuple[str, ...] = (
    "Port scan detected from external IP",
    "Unusual data transfer on port 443",
    "Failed authentication attempts increased",
    "Suspicious file activity detected",
    "Network traffic anomaly detected",
)


class AlertFeed:
    """FIFO of distinct alert strings. Callers provide the locking."""

    def __init__(
        self,
        rng: random.Random,
        probability: float = DEFAULT_PROBABILITY,
        capacity: int = DEFAULT_CAPACITY,
        catalog: Sequence[str] = DEFAULT_CATALOG,
    ) -> None:
        if not 0.0 <= probability <= 1.0:
            raise ValidationError(f"Alert probability must be within [0, 1], got {probability}")
        if capacity < 1:
            raise ValidationError(f"Alert capacity must be positive, got {capacity}")
        if not catalog:
            raise ValidationError("Alert catalog cannot be empty")
        self.rng = rng
        self.probability = probability
        self.capacity = capacity
        self.catalog = tuple(catalog)
        self._buffer: deque[str] = deque()

    def recent(self) -> tuple[str, ...]:
        """Oldest first."""
        return tuple(self._buffer)

    def try_generate(self) -> str | None:
        """Maybe append one alert; return it, or None on a miss or duplicate."""
        if self.rng.random() >= self.probability:
            return None
        alert = self.rng.choice(self.catalog)
        if alert in self._buffer:
            log.debug("Alert suppressed (already buffered): %s", alert)
            return None
        self._buffer.append(alert)
        if len(self._buffer) > self.capacity:
            evicted = self._buffer.popleft()
            log.debug("Alert evicted: %s", evicted)
        log.info("Alert raised: %s", alert)
        return alert
