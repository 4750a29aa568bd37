"""Polling reads of store variables."""

import logging
import threading
from collections.abc import Callable
from types import TracebackType
from typing import Any

from .external import (
    ACTION_PREFIX,
    ActionKey,
    ExternalStore,
    KeyLike,
    default_store,
)

logger = logging.getLogger(__name__)


class VarPoller:
    """Samples one store key on a timer and keeps the last observed value.

    ``value`` changes only when a sample differs from it, so a change reaches
    the poller within one interval. Unset (None) samples map to ``default``.
    """

    def __init__(
        self,
        key: KeyLike,
        default: Any = None,
        interval: float = 0.1,
        store: ExternalStore | None = None,
        on_change: Callable[[Any, Any], None] | None = None,
    ):
        """Initialize poller.

        Args:
            key: Store key to sample
            default: Value observed while the key is unset
            interval: Seconds between samples
            store: Store to read, the process-wide store by default
            on_change: Called with (previous, current) when the value changes
        """
        if interval <= 0:
            raise ValueError("Poll interval must be positive")

        self.key = key
        self.default = default
        self.interval = interval
        self.store = store if store is not None else default_store
        self.on_change = on_change

        initial = self.store.get_var(key)
        self.value: Any = initial if initial is not None else default

        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def poll_once(self) -> bool:
        """Take one sample. Returns True if the observed value changed."""
        current = self.store.get_var(self.key)
        if current is None:
            current = self.default
        if current == self.value:
            return False

        previous, self.value = self.value, current
        logger.debug("%s changed via polling", self.key)
        if self.on_change is not None:
            self.on_change(previous, current)
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.poll_once()
            except Exception:
                logger.exception("Polling %s failed", self.key)

    def start(self) -> "VarPoller":
        """Start sampling on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return self
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name=f"poll-{self.key}", daemon=True
        )
        self._thread.start()
        logger.debug("Started polling %s every %ss", self.key, self.interval)
        return self

    def stop(self) -> None:
        """Stop sampling and wait for the thread to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        logger.debug("Stopped polling %s", self.key)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> "VarPoller":
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


def poll_action(
    action: str | ActionKey, interval: float = 0.1, store: ExternalStore | None = None
) -> VarPoller:
    """Poller over an action key, observing the last trigger timestamp."""
    key = action.key if isinstance(action, ActionKey) else f"{ACTION_PREFIX}{action}"
    return VarPoller(key, default=None, interval=interval, store=store)
