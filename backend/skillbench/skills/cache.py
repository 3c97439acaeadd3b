from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from skillbench.skills.types import SkillCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    catalog: SkillCatalog
    loaded_at: float


class CatalogCache:
    """Holds the last validated catalog for ``ttl_seconds``.

    ``loader`` must return a catalog that already passed the integrity gate. The snapshot
    reference is only replaced after a full load succeeds; a failed refresh drops it so the
    next request loads again instead of reusing an expired catalog.
    """

    def __init__(self, ttl_seconds: float = 0.0, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: _Snapshot | None = None

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def _fresh(self, snapshot: _Snapshot | None) -> bool:
        return snapshot is not None and (self._clock() - snapshot.loaded_at) < self.ttl_seconds

    def get(self, loader: Callable[[], SkillCatalog]) -> SkillCatalog:
        if not self.enabled:
            return loader()

        snapshot = self._snapshot
        if self._fresh(snapshot):
            return snapshot.catalog  # type: ignore[union-attr]

        with self._lock:
            snapshot = self._snapshot
            if self._fresh(snapshot):
                return snapshot.catalog  # type: ignore[union-attr]
            try:
                catalog = loader()
            except Exception:
                self._snapshot = None
                raise
            self._snapshot = _Snapshot(catalog=catalog, loaded_at=self._clock())
            logger.info("Skills catalog snapshot refreshed (ttl=%ss)", self.ttl_seconds)
            return catalog

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
