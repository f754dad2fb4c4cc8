"""Latest-issued-wins sequencing for superseded requests.

A caller issues a sequence number before starting a request and applies the
response only if no newer request has been issued since. A slow, older
response arriving after a faster, newer one is discarded.
"""

import itertools
import threading


class RequestSequencer:
    """Monotonic request counter, safe to share between threads."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.RLock()

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_latest(self, sequence: int) -> bool:
        with self._lock:
            return sequence == self._latest

    def apply(self, sequence: int, callback, *args, **kwargs) -> bool:
        """Run callback only for the latest issued sequence. Returns whether it ran."""
        with self._lock:
            if sequence != self._latest:
                return False
            callback(*args, **kwargs)
            return True
