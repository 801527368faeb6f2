"""statesync: delta-state CRDTs for a replicated state-synchronization layer.

The library is silent by default. Enable logging with
``statesync.enable_console_logging()`` or ``statesync.configure_from_env()``.
"""

import logging

from statesync.any_support import AnySupport, WireElement
from statesync.crdt import DeltaCRDT, GSet, create_crdt, crdt_for_state
from statesync.exceptions import (
    InvalidDeltaKind,
    InvalidStateKind,
    StateSyncError,
    UnknownTypeError,
)
from statesync.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    set_level,
    set_module_level,
)

logging.getLogger("statesync").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AnySupport",
    "DeltaCRDT",
    "GSet",
    "InvalidDeltaKind",
    "InvalidStateKind",
    "StateSyncError",
    "UnknownTypeError",
    "WireElement",
    "configure_from_env",
    "create_crdt",
    "crdt_for_state",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "set_level",
    "set_module_level",
]
