"""Process-wide rule cache.

Populated lazily from a RuleSource on first read and kept until the owner of
the rules calls `invalidate()`. The cache never decides on its own that rules
changed: there is no TTL.
"""

import logging
import threading

from linebuild.rules.models import ValidationRule
from linebuild.rules.source import RuleSource

logger = logging.getLogger(__name__)


class RuleCache:
    """Caches the enabled rules of one RuleSource."""

    def __init__(self, source: RuleSource) -> None:
        """Initialize cache.

        Args:
            source: Rule source to load from on a cache miss
        """
        self.source = source
        self._rules: tuple[ValidationRule, ...] | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        """True if rules are currently cached."""
        return self._rules is not None

    def get_rules(self) -> list[ValidationRule]:
        """Return the cached enabled rules, loading them on a miss.

        Errors from the source propagate and leave the cache empty.

        Returns:
            Snapshot of enabled rules (a new list; the cache itself is not exposed)
        """
        rules = self._rules
        if rules is not None:
            logger.debug("Rule cache hit (%d rules)", len(rules))
            return list(rules)

        with self._lock:
            if self._rules is None:
                logger.debug("Rule cache miss, loading from %s", type(self.source).__name__)
                self._rules = tuple(self.source.load_enabled_rules())
            return list(self._rules)

    def invalidate(self) -> None:
        """Drop cached rules so the next read reloads from the source."""
        with self._lock:
            self._rules = None
        logger.debug("Rule cache invalidated")
