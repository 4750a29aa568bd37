"""Process-wide key/value store shared by loosely coupled consumers.

Producers write with :meth:`ExternalStore.set_var`; consumers either
subscribe to a key and are called on every write, or sample it with a
:class:`~requirements_hub.store.poller.VarPoller`. Keys starting with ``%``
are action keys: their value is the millisecond timestamp of the last
trigger, and only its change carries meaning.
"""

import logging
import threading
import time
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTION_PREFIX = "%"

Listener = Callable[[Any], None]


@dataclass(frozen=True)
class StoreKey(Generic[T]):
    """A named store variable with the type of value it holds."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ActionKey:
    """A fire-and-forget event; stored under ``%<name>``."""

    name: str

    @property
    def key(self) -> str:
        return f"{ACTION_PREFIX}{self.name}"

    def __str__(self) -> str:
        return self.key


KeyLike = str | StoreKey[Any] | ActionKey


def _key_name(key: KeyLike) -> str:
    return str(key)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class StoreEntry:
    key: str
    value: Any
    last_write: int


class ExternalStore:
    """Key/value map with per-key subscriptions.

    Entries are never deleted; a key goes from unset to set and is then only
    overwritten. Writes are atomic per key.
    """

    def __init__(self) -> None:
        self._entries: dict[str, StoreEntry] = {}
        self._subscribers: dict[str, dict[str, Listener]] = {}
        self._lock = threading.RLock()

    @overload
    def set_var(self, key: StoreKey[T], value: T) -> T: ...

    @overload
    def set_var(self, key: str | ActionKey, value: Any) -> Any: ...

    def set_var(self, key: KeyLike, value: Any) -> Any:
        """Write ``value`` under ``key``, notify subscribers, return the new value."""
        self.set_vars({_key_name(key): value})
        return self.get_var(key)

    def set_vars(self, values: Mapping[KeyLike, Any]) -> None:
        """Write several keys at once, then notify each key's subscribers."""
        written = now_ms()
        named = {_key_name(key): value for key, value in values.items()}
        with self._lock:
            for key, value in named.items():
                previous = self._entries.get(key)
                self._entries[key] = StoreEntry(key=key, value=value, last_write=written)
                if previous is None or previous.value != value:
                    logger.debug("Variable set: %s", key)
            listeners = {
                key: list(self._subscribers.get(key, {}).values()) for key in named
            }

        for key, key_listeners in listeners.items():
            for listener in key_listeners:
                try:
                    listener(named[key])
                except Exception:
                    logger.exception("Subscriber for %s raised", key)

    @overload
    def get_var(self, key: StoreKey[T]) -> T | None: ...

    @overload
    def get_var(self, key: str | ActionKey) -> Any: ...

    def get_var(self, key: KeyLike) -> Any:
        """Return the value under ``key``, or None if it was never set."""
        with self._lock:
            entry = self._entries.get(_key_name(key))
        return entry.value if entry is not None else None

    def get_vars(self, keys: Iterable[KeyLike]) -> dict[str, Any]:
        """Return the set keys among ``keys`` with their values."""
        with self._lock:
            return {
                name: self._entries[name].value
                for name in map(_key_name, keys)
                if name in self._entries
            }

    def last_write(self, key: KeyLike) -> int | None:
        """Millisecond timestamp of the last write to ``key``."""
        with self._lock:
            entry = self._entries.get(_key_name(key))
        return entry.last_write if entry is not None else None

    def list_vars(self) -> dict[str, Any]:
        """Return a snapshot of every entry, logging a compact summary."""
        with self._lock:
            state = {key: entry.value for key, entry in self._entries.items()}

        summary = {}
        for key, value in state.items():
            if isinstance(value, list):
                summary[key] = f"[list with {len(value)} items]"
            elif isinstance(value, dict):
                summary[key] = "{dict}"
            else:
                summary[key] = value
        logger.info("Current state variables: %s", summary)
        return state

    def subscribe(self, key: KeyLike, listener: Listener) -> Callable[[], None]:
        """Call ``listener(value)`` on every write to ``key``.

        Returns:
            A function removing exactly this subscription
        """
        name = _key_name(key)
        if not callable(listener):
            logger.error("Subscribe requires a callable listener for %s", name)
            return lambda: None

        subscription_id = f"{name}_{uuid.uuid4().hex}"
        with self._lock:
            self._subscribers.setdefault(name, {})[subscription_id] = listener

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._subscribers.get(name)
                if listeners is None:
                    return
                listeners.pop(subscription_id, None)
                if not listeners:
                    del self._subscribers[name]

        return unsubscribe

    def subscriber_count(self, key: KeyLike) -> int:
        with self._lock:
            return len(self._subscribers.get(_key_name(key), {}))

    def trigger_action(self, action: str | ActionKey, payload: Any = None) -> Any:
        """Signal that ``action`` happened; the payload defaults to now in ms."""
        key = action.key if isinstance(action, ActionKey) else f"{ACTION_PREFIX}{action}"
        return self.set_var(key, now_ms() if payload is None else payload)

    def get_action_value(self, action: str | ActionKey) -> Any:
        key = action.key if isinstance(action, ActionKey) else f"{ACTION_PREFIX}{action}"
        return self.get_var(key)


default_store = ExternalStore()

set_var = default_store.set_var
set_vars = default_store.set_vars
get_var = default_store.get_var
get_vars = default_store.get_vars
list_vars = default_store.list_vars
subscribe = default_store.subscribe
trigger_action = default_store.trigger_action
get_action_value = default_store.get_action_value
