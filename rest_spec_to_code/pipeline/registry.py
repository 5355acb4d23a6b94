"""
Assembly registry for rendered definitions.

Every generated definition is registered here under its name together with
its rendered source. Two schema branches may produce the same definition
independently; that is fine as long as they render identically.
"""

from __future__ import annotations

import logging
import threading

from .errors import NameConflictError

logger = logging.getLogger(__name__)


class AssemblyRegistry:
    """Append-only, conflict-checked store of name -> rendered content.

    The read-compare-write in ``register`` runs under a lock so the registry
    can be shared if interpretation is ever parallelized.
    """

    def __init__(self):
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, name: str, content: str) -> bool:
        """Register content under name.

        Args:
            name: Definition name (also the output file stem)
            content: Rendered source of the definition

        Returns:
            True if the entry was added, False if an identical entry existed

        Raises:
            NameConflictError: If name is already registered with different content
        """
        with self._lock:
            existing = self._entries.get(name)
            if existing is None:
                self._entries[name] = content
                logger.debug("Registered %s", name)
                return True
            if existing != content:
                raise NameConflictError(name)
            logger.debug("Skipped identical re-registration of %s", name)
            return False

    def render(self) -> dict[str, str]:
        """Return a snapshot of all entries."""
        with self._lock:
            return dict(self._entries)

    def get(self, name: str) -> str | None:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
