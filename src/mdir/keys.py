"""Unique message keys.

A key looks like ``<time>.<host>.<pid><counter><random>``:

- ``time``: Unix time in seconds
- ``host``: hostname, with ``/`` and ``:`` written as ``\\057`` and ``\\072``
- ``pid``, ``counter``: process id followed directly by a process-local counter
- ``random``: 10 bytes from the OS CSPRNG, hex-encoded

Time and host separate deliveries on different machines, pid and counter
separate deliveries within one process, and the random suffix covers a
restarted process reusing a pid within the same second.
"""

import itertools
import os
import secrets
import socket
import threading
import time

COUNTER_START = 10000
RANDOM_BYTES = 10


def escape_host(host: str) -> str:
    """Escape the characters that would break a Maildir filename."""
    return host.replace("/", "\\057").replace(":", "\\072")


class KeyGenerator:
    """Generates keys for one process.

    Create one per process and share it; the counter is what keeps keys made
    within the same second distinct.
    """

    def __init__(self, start: int = COUNTER_START):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def _next(self) -> int:
        with self._lock:
            return next(self._counter)

    def generate(self) -> str:
        """Return a new key. Raises ``OSError`` if hostname or entropy is unavailable."""
        host = escape_host(socket.gethostname())
        random_hex = secrets.token_bytes(RANDOM_BYTES).hex()
        return f"{int(time.time())}.{host}.{os.getpid()}{self._next()}{random_hex}"

    __call__ = generate


_default: KeyGenerator | None = None
_default_lock = threading.Lock()


def default_generator() -> KeyGenerator:
    """The process-wide generator used when none is passed explicitly."""
    global _default
    with _default_lock:
        if _default is None:
            _default = KeyGenerator()
        return _default


def generate_key() -> str:
    """Generate a key using the process-wide generator."""
    return default_generator().generate()
