from collections import OrderedDict
from typing import Callable, Generic, Optional, Tuple, TypeVar
import logging
import threading
import time
import uuid

from app.exceptions import NotFoundError

T = TypeVar("T")

logger = logging.getLogger("kuchnie.sessions")


class SessionStore(Generic[T]):
    """Process-local map of session id -> state, lost on restart.

    Sessions idle for longer than ``idle_ttl_sec`` expire, and once
    ``max_items`` sessions exist the least recently used one is dropped to
    make room for a new one. An expired or dropped session reads as 404.
    """

    def __init__(
        self,
        kind: str,
        max_items: int = 500,
        idle_ttl_sec: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.kind = kind
        self.max_items = max_items
        self.idle_ttl_sec = idle_ttl_sec
        self._clock = clock
        self._items: "OrderedDict[str, Tuple[T, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def _expire(self, now: float) -> None:
        # Oldest access first, so stop at the first live entry
        while self._items:
            session_id, (_, last_access) = next(iter(self._items.items()))
            if now - last_access <= self.idle_ttl_sec:
                break
            del self._items[session_id]
            logger.info(f"session_expired kind={self.kind} session_id={session_id}")

    def add(self, item: T) -> str:
        session_id = str(uuid.uuid4())
        with self._lock:
            now = self._clock()
            self._expire(now)
            while self._items and len(self._items) >= self.max_items:
                evicted, _ = self._items.popitem(last=False)
                logger.info(f"session_evicted kind={self.kind} session_id={evicted}")
            self._items[session_id] = (item, now)
        return session_id

    def get(self, session_id: str) -> T:
        with self._lock:
            now = self._clock()
            self._expire(now)
            entry: Optional[Tuple[T, float]] = self._items.get(session_id)
            if entry is not None:
                self._items[session_id] = (entry[0], now)
                self._items.move_to_end(session_id)
        if entry is None:
            raise NotFoundError(f"{self.kind} session {session_id} not found")
        return entry[0]

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._items.pop(session_id, None) is None:
                raise NotFoundError(f"{self.kind} session {session_id} not found")

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            self._expire(self._clock())
            return len(self._items)
