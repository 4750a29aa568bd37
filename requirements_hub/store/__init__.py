"""External reactive store shared between client components."""

from .external import (
    ActionKey,
    ExternalStore,
    StoreKey,
    default_store,
    get_action_value,
    get_var,
    get_vars,
    list_vars,
    set_var,
    set_vars,
    subscribe,
    trigger_action,
)
from .poller import VarPoller, poll_action

__all__ = [
    "ActionKey",
    "ExternalStore",
    "StoreKey",
    "VarPoller",
    "default_store",
    "get_action_value",
    "get_var",
    "get_vars",
    "list_vars",
    "poll_action",
    "set_var",
    "set_vars",
    "subscribe",
    "trigger_action",
]
