"""Exceptions raised by statesync."""

from __future__ import annotations


class StateSyncError(Exception):
    """Base class for statesync errors."""


class InvalidDeltaKind(StateSyncError, ValueError):
    """A delta payload is not tagged with the kind of CRDT it is applied to."""


class InvalidStateKind(StateSyncError, ValueError):
    """A state payload is not tagged with the kind of CRDT it is applied to."""


class UnknownTypeError(StateSyncError, ValueError):
    """A value cannot be serialized, deserialized or keyed by AnySupport."""
