"""Request sequence tokens used to flag quotes superseded by a newer request."""

from __future__ import annotations

import itertools
import threading
from collections import OrderedDict
from typing import Hashable


class QuoteSequencer:
    """Tracks the latest request token issued per key.

    A caller takes a token with :meth:`begin` when a request starts and asks
    :meth:`is_current` when it finishes. If another request for the same key
    started in between, the earlier result is stale. At most ``capacity`` keys
    are tracked; the least recently used one is evicted, and an evicted key's
    outstanding token counts as current.
    """

    def __init__(self, capacity: int = 10_000) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._latest: OrderedDict[Hashable, int] = OrderedDict()
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def begin(self, key: Hashable) -> int:
        with self._lock:
            token = next(self._counter)
            self._latest[key] = token
            self._latest.move_to_end(key)
            while len(self._latest) > self._capacity:
                self._latest.popitem(last=False)
            return token

    def is_current(self, key: Hashable, token: int) -> bool:
        with self._lock:
            latest = self._latest.get(key)
            return latest is None or latest == token

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)
