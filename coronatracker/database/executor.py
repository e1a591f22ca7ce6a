"""Background execution context for storage work.

A dedicated daemon thread runs its own asyncio event loop; coroutines are
handed to it from any thread and come back as concurrent futures, so callers
on the interactive thread never wait on database I/O unless they choose to.
"""

import asyncio
import threading
from concurrent.futures import Future, wait
from typing import Coroutine, Optional

from coronatracker.database.errors import StoreClosedError
from coronatracker.logger import get_logger

logger = get_logger(__name__)


class BackgroundExecutor:
    """
    Runs coroutines on a single background event loop thread.

    Work is started in submission order. `stop()` lets already submitted
    work finish before the loop is shut down.

    Example:
        >>> executor = BackgroundExecutor()
        >>> executor.start()
        >>> future = executor.submit(some_coroutine())
        >>> future.result(timeout=5)
        >>> executor.stop()
    """

    def __init__(self, name: str = "coronatracker-db"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._pending: set[Future] = set()
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped

    def start(self) -> None:
        """Start the loop thread. Calling it again while running is a no-op."""
        with self._lock:
            if self._stopped:
                raise StoreClosedError(f"Executor {self.name} has been stopped")
            if self._thread is not None:
                return

            self._loop = asyncio.new_event_loop()
            ready = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(ready,), name=self.name, daemon=True
            )
            self._thread.start()

        ready.wait()
        logger.debug(f"Background executor {self.name} started")

    def _run(self, ready: threading.Event) -> None:
        loop = self._loop
        asyncio.set_event_loop(loop)
        loop.call_soon(ready.set)
        try:
            loop.run_forever()
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()

    def in_background(self) -> bool:
        """True when called from the executor's own thread."""
        return threading.current_thread() is self._thread

    def submit(self, coro: Coroutine) -> Future:
        """
        Schedule a coroutine on the background loop.

        Args:
            coro: Coroutine object to run

        Returns:
            Future resolved with the coroutine's result or exception

        Raises:
            StoreClosedError: executor not started or already stopped
        """
        with self._lock:
            if self._stopped or self._loop is None:
                coro.close()
                raise StoreClosedError(f"Executor {self.name} is not running")
            future = asyncio.run_coroutine_threadsafe(coro, self._loop)
            self._pending.add(future)

        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Drain pending work, then stop the loop and join the thread.

        Args:
            timeout: Max seconds to wait for pending work and for the thread
        """
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            pending = list(self._pending)
            loop, thread = self._loop, self._thread

        if loop is None or thread is None:
            return

        if self.in_background():
            # Cannot wait on ourselves; let the loop finish after this callback
            loop.call_soon(loop.stop)
            return

        if pending:
            logger.info(f"Waiting for {len(pending)} pending background task(s)")
            wait(pending, timeout=timeout)

        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)
        logger.debug(f"Background executor {self.name} stopped")
