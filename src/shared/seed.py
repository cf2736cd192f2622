"""Random source initialisation for reproducible alert draws."""

from __future__ import annotations

import logging
import random

log = logging.getLogger(__name__)


def init_rng(seed: int | None = None) -> random.Random:
    """Return a dedicated Random instance, seeded when *seed* is given.

    Unlike a global ``random.seed`` call this leaves the module-level
    generator untouched, so the alert feed is the only consumer.
    """
    rng = random.Random(seed)
    if seed is None:
        log.debug("Random source initialised from system entropy")
    else:
        log.info("Random seed initialised: %d", seed)
    return rng
