"""Grow-only Set (G-Set) CRDT with delta-state replication.

A G-Set supports insertion only; merge is set union. Elements are opaque
application values, so membership is decided by the element's comparable
key (see ``AnySupport.to_comparable``) rather than by the value's own
equality.

The set keeps two views over the same data:

- the *current value*, a map of comparable key to element, and
- the *pending delta*, the wire form of every element added locally since
  the last harvest.

The host runtime harvests the pending delta with ``get_and_reset_delta()``
and ships it to peers, which merge it with ``apply_delta()``. Harvesting a
full snapshot with ``get_state_and_reset_delta()`` discards the pending
delta, since the snapshot already covers it.

Example::

    a = GSet()
    b = GSet()

    a.add("x").add("y")
    b.add("y").add("z")

    delta_a = a.get_and_reset_delta()
    delta_b = b.get_and_reset_delta()
    b.apply_delta(delta_a)
    a.apply_delta(delta_b)
    assert a.size == b.size == 3
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Self

from statesync.any_support import DEFAULT_ANY_SUPPORT
from statesync.exceptions import InvalidDeltaKind, InvalidStateKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from statesync.any_support import AnySupport, WireElement

logger = logging.getLogger(__name__)

GSET_KIND = "gset"


def _gset_body(payload: Any, error: type[ValueError], what: str) -> Mapping:
    """Return the ``gset`` branch of a tagged payload or raise ``error``."""
    body = payload.get(GSET_KIND) if isinstance(payload, Mapping) else None
    if not isinstance(body, Mapping):
        raise error(f"Cannot apply {what} {payload!r} to GSet")
    return body


class GSet:
    """Grow-only set CRDT.

    Not thread-safe: the owning runtime serializes calls per instance.

    Args:
        any_support: Serializer and key derivation for elements. Defaults
            to the shared ``AnySupport`` instance.
    """

    __slots__ = ("_any_support", "_current", "_delta")

    def __init__(self, any_support: AnySupport | None = None):
        self._any_support = any_support or DEFAULT_ANY_SUPPORT
        self._current: dict[str, Any] = {}
        # Insertion-ordered set of wire elements not yet harvested
        self._delta: dict[WireElement, None] = {}

    @property
    def size(self) -> int:
        """Number of distinct elements in the set."""
        return len(self._current)

    def has(self, element: Any) -> bool:
        """Check whether the set contains an element.

        Args:
            element: The element to check.

        Returns:
            True if an element with the same comparable key is present.
        """
        return self._any_support.to_comparable(element) in self._current

    def elements(self) -> Iterator[Any]:
        """Iterate over the distinct elements of the set."""
        return iter(self._current.values())

    def for_each(self, callback: Callable[[Any], object]) -> None:
        """Call ``callback`` once with each element."""
        for element in self._current.values():
            callback(element)

    def add(self, element: Any) -> Self:
        """Add an element to the set.

        Adding an element that is already present is a no-op and does not
        touch the pending delta.

        Args:
            element: The element to add.

        Returns:
            This set, so calls can be chained.
        """
        key = self._any_support.to_comparable(element)
        if key not in self._current:
            self._current[key] = element
            self._delta[self._any_support.serialize(element)] = None
        return self

    def get_and_reset_delta(self) -> dict | None:
        """Harvest the elements added locally since the last harvest.

        Returns:
            ``{"gset": {"added": [...]}}`` in the order elements were added,
            or None if nothing was added.
        """
        if not self._delta:
            return None
        added = list(self._delta)
        self._delta.clear()
        logger.debug("GSet delta harvested: %d added", len(added))
        return {GSET_KIND: {"added": added}}

    def apply_delta(self, delta: Any, any_support: AnySupport | None = None) -> None:
        """Merge a delta from another replica (set union).

        Idempotent, commutative and associative. The pending delta is not
        modified: merged elements came from a peer and are not re-broadcast.

        Args:
            delta: A ``{"gset": {"added": [...]}}`` payload.
            any_support: Deserializer for the wire elements. Defaults to
                this set's own.

        Raises:
            InvalidDeltaKind: If the payload is not a G-Set delta. The set
                is left untouched.
        """
        body = _gset_body(delta, InvalidDeltaKind, "delta")
        added = body.get("added")
        if not added:
            logger.debug("GSet delta with no items to add")
            return
        self._current.update(self._decode(added, any_support))

    def get_state_and_reset_delta(self) -> dict:
        """Harvest a full snapshot of the set.

        The pending delta is discarded unconditionally: a peer that
        receives this snapshot already has every element in it.

        Returns:
            ``{"gset": {"items": [...]}}`` with every current element.
        """
        self._delta.clear()
        items = [self._any_support.serialize(element) for element in self._current.values()]
        logger.debug("GSet state harvested: %d items", len(items))
        return {GSET_KIND: {"items": items}}

    def apply_state(self, state: Any, any_support: AnySupport | None = None) -> None:
        """Replace the set's contents with an authoritative snapshot.

        This is a full resynchronization, not a merge: elements missing from
        ``state`` are dropped. Use it to (re)establish a replica, never to
        merge a peer's delta.

        Args:
            state: A ``{"gset": {"items": [...]}}`` payload.
            any_support: Deserializer for the wire elements. Defaults to
                this set's own.

        Raises:
            InvalidStateKind: If the payload is not a G-Set state. The set
                is left untouched.
        """
        body = _gset_body(state, InvalidStateKind, "state")
        items = body.get("items") or []
        if not items:
            logger.debug("GSet state with no items")
        current = dict(self._decode(items, any_support))
        self._current.clear()
        self._current.update(current)
        logger.debug("GSet state applied: %d items", len(self._current))

    def _decode(
        self, wire_elements: Iterable[Any], any_support: AnySupport | None
    ) -> list[tuple[str, Any]]:
        support = any_support or self._any_support
        decoded = []
        for wire in wire_elements:
            value = support.deserialize(wire)
            decoded.append((self._any_support.to_comparable(value), value))
        return decoded

    def __contains__(self, element: Any) -> bool:
        return self.has(element)

    def __len__(self) -> int:
        return len(self._current)

    def __iter__(self) -> Iterator[Any]:
        return self.elements()

    def __str__(self) -> str:
        return "GSet(" + ",".join(self._current) + ")"

    def __repr__(self) -> str:
        return f"GSet(size={self.size})"
