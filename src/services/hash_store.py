import asyncio
import threading
from collections import deque
from collections.abc import Iterable


class UpdateNotifier:
    """Wakes one waiter per notification.

    A notification that arrives while nobody is waiting is kept as a single
    permit, so the next ``wait()`` returns immediately.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._waiters: deque[asyncio.Future[None]] = deque()
        self._permit = False

    def notify_one(self) -> None:
        with self._lock:
            while self._waiters:
                waiter = self._waiters.popleft()
                if not waiter.done():
                    waiter.get_loop().call_soon_threadsafe(_wake, waiter)
                    return
            self._permit = True

    async def wait(self) -> None:
        with self._lock:
            if self._permit:
                self._permit = False
                return
            waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
        try:
            await waiter
        except asyncio.CancelledError:
            with self._lock:
                notified = waiter not in self._waiters
                if not notified:
                    self._waiters.remove(waiter)
            if notified:
                # The notification picked this waiter; pass it on.
                self.notify_one()
            raise


def _wake(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)


class HashStore:
    """Latest content hash per image key.

    Written by the refresher, read by request handlers, possibly from other
    threads. Every key starts out as the empty string.
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self._lock = threading.Lock()
        self._hashes: dict[str, str] = {key: "" for key in keys}
        self._notifier = UpdateNotifier()

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._hashes)

    def get(self, key: str) -> str:
        with self._lock:
            return self._hashes[key]

    def set(self, key: str, image_hash: str) -> bool:
        """Store ``image_hash`` for ``key``; returns whether the value changed."""
        with self._lock:
            previous = self._hashes[key]
            self._hashes[key] = image_hash
        self._notifier.notify_one()
        return previous != image_hash

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._hashes)

    async def wait_for_update(self) -> None:
        await self._notifier.wait()
