"""Observable values pushed by the storage layer."""

import threading
from typing import Callable, Generic, List, Optional, TypeVar

from coronatracker.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Observer = Callable[[Optional[T]], None]


class LiveData(Generic[T]):
    """
    Holds the latest result of a query and notifies observers when it changes.

    The value is None until the first load and whenever the query finds
    nothing. After the first load, observers only hear about values that
    differ from the current one. Observers run on the thread that posts the
    value (the background executor), except for the immediate call made by
    `observe()` on an already loaded view.

    Deliveries are serialised: an observer never receives an older value
    after a newer one. Observers must not wait on work from the background
    executor, since they may be running on it.

    Subclasses can override `_on_active()` and `_on_inactive()`, called when
    the first observer is added and when the last one is removed.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._value: Optional[T] = None
        self._loaded = threading.Event()
        self._observers: List[Observer] = []
        self._lock = threading.Lock()
        # Held while observers are called; reentrant so observers may observe
        self._dispatch_lock = threading.RLock()

    def __repr__(self) -> str:
        return f"<LiveData {self.name} loaded={self.loaded}>"

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def loaded(self) -> bool:
        return self._loaded.is_set()

    def has_observers(self) -> bool:
        with self._lock:
            return bool(self._observers)

    def _on_active(self) -> None:
        pass

    def _on_inactive(self) -> None:
        pass

    def observe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer.

        If the view has already been loaded the observer is called right away
        with the current value.

        Returns:
            A callable that unregisters the observer
        """
        with self._dispatch_lock:
            with self._lock:
                self._observers.append(observer)
                if len(self._observers) == 1:
                    self._on_active()
                loaded = self._loaded.is_set()
                value = self._value

            if loaded:
                self._dispatch(observer, value)

        return lambda: self.remove_observer(observer)

    def remove_observer(self, observer: Observer) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                return
            if not self._observers:
                self._on_inactive()

    def wait(self, timeout: Optional[float] = None) -> Optional[T]:
        """Block until the first load completes and return the value."""
        if not self._loaded.wait(timeout):
            raise TimeoutError(f"{self!r} was not loaded within {timeout}s")
        return self._value

    def post_value(self, value: Optional[T]) -> bool:
        """
        Publish a new value.

        Returns:
            True if observers were notified
        """
        with self._dispatch_lock:
            with self._lock:
                if self._loaded.is_set() and value == self._value:
                    return False
                self._value = value
                self._loaded.set()
                observers = list(self._observers)

            for observer in observers:
                self._dispatch(observer, value)
        return True

    def _dispatch(self, observer: Observer, value: Optional[T]) -> None:
        try:
            observer(value)
        except Exception:
            logger.exception(f"Observer {observer!r} of {self.name or 'live data'} failed")
