# src/contractsim_core/cache/service.py
"""
Provides the per-simulator memo for built operation proxy tables.
"""
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

PROXY_KINDS = ('pure', 'impure')


class ProxyCache:
    """
    A per-instance cache of contextless operation tables, keyed by kind
    ('pure' or 'impure').

    Tables are built on first access through `get_or_build` and kept until
    `invalidate` is called. The simulator invalidates whenever its witness table
    changes, because every cached table closes over the engine that was current
    when it was built.

    All state lives on the instance; two simulators never share a table.
    """

    def __init__(self, owner: str = "simulator"):
        self._owner = owner
        self._tables: Dict[str, Any] = {}
        self.clear_stats()
        logger.debug(f"ProxyCache created for {self._owner}.")

    def get(self, kind: str) -> Optional[Any]:
        """Returns the cached table for `kind`, or None. Counts a hit or a miss."""
        self._check_kind(kind)
        if kind in self._tables:
            self._stats['hits'] += 1
            logger.debug(f"Proxy cache HIT for '{kind}' table of {self._owner}.")
            return self._tables[kind]

        self._stats['misses'] += 1
        logger.debug(f"Proxy cache MISS for '{kind}' table of {self._owner}.")
        return None

    def put(self, kind: str, table: Any):
        self._check_kind(kind)
        if kind in self._tables:
            logger.warning(f"Overwriting cached '{kind}' table of {self._owner} without invalidation.")
        self._tables[kind] = table

    def get_or_build(self, kind: str, builder: Callable[[], Any]) -> Any:
        """Returns the cached table for `kind`, building and storing it on a miss."""
        table = self.get(kind)
        if table is None:
            table = builder()
            self.put(kind, table)
        return table

    def invalidate(self):
        """Drops every cached table; the next access rebuilds."""
        dropped = sorted(self._tables)
        self._tables.clear()
        self._stats['invalidations'] += 1
        logger.debug(f"Invalidated proxy cache of {self._owner} (dropped: {dropped}).")

    def is_cached(self, kind: str) -> bool:
        self._check_kind(kind)
        return kind in self._tables

    def get_stats(self) -> Dict[str, int]:
        """Returns a copy of the hit/miss/invalidation counters."""
        return self._stats.copy()

    def clear_stats(self):
        self._stats = {'hits': 0, 'misses': 0, 'invalidations': 0}

    @staticmethod
    def _check_kind(kind: str):
        if kind not in PROXY_KINDS:
            raise ValueError(f"Invalid proxy kind '{kind}'. Must be one of {PROXY_KINDS}.")
