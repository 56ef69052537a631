"""Node identifier generation."""

import threading


class IdGenerator:
    """Issues process-unique, monotonically increasing node identifiers.

    The counter is guarded by a lock so generators can be shared between
    threads. Identifiers are only issued on request, so an id never exists
    before the node that carries it.
    """

    def __init__(self, prefix: str = "node-"):
        self.prefix = prefix
        self._counter = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            value = self._counter
            self._counter += 1
        return f"{self.prefix}{value}"

    @property
    def issued(self) -> int:
        """Number of identifiers issued so far."""
        return self._counter

    def __repr__(self) -> str:
        return f"IdGenerator(prefix={self.prefix!r}, issued={self._counter})"


# Shared by every builder that is not handed its own generator
default_id_generator = IdGenerator()
