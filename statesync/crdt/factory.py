"""Build CRDT replicas from payload kind tags.

State and delta payloads are tagged unions keyed by CRDT kind (for
example ``{"gset": {...}}``). When an entity is rehydrated from an
authoritative snapshot, the kind tag decides which CRDT to construct.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from statesync.crdt.gset import GSET_KIND, GSet
from statesync.exceptions import InvalidStateKind

if TYPE_CHECKING:
    from statesync.any_support import AnySupport
    from statesync.crdt.protocol import DeltaCRDT

logger = logging.getLogger(__name__)

CRDT_KINDS: dict[str, type] = {
    GSET_KIND: GSet,
}


def create_crdt(kind: str, any_support: AnySupport | None = None) -> DeltaCRDT:
    """Create an empty CRDT for a payload kind tag.

    Args:
        kind: Payload tag, e.g. ``"gset"``.
        any_support: Passed through to the CRDT constructor.

    Raises:
        InvalidStateKind: If ``kind`` is not a known CRDT kind.
    """
    try:
        crdt_class = CRDT_KINDS[kind]
    except KeyError:
        raise InvalidStateKind(f"Unknown CRDT kind {kind!r}") from None
    return crdt_class(any_support)


def crdt_for_state(state: Any, any_support: AnySupport | None = None) -> DeltaCRDT:
    """Create a CRDT of the state's kind and load the state into it.

    Args:
        state: A tagged state payload such as ``{"gset": {"items": [...]}}``.
        any_support: Serializer for the new CRDT and its items.

    Raises:
        InvalidStateKind: If the payload carries no known kind tag.
    """
    if not isinstance(state, Mapping):
        raise InvalidStateKind(f"Cannot create CRDT from state {state!r}")
    kinds = [kind for kind in CRDT_KINDS if state.get(kind) is not None]
    if len(kinds) != 1:
        raise InvalidStateKind(f"Cannot create CRDT from state {state!r}")

    crdt = create_crdt(kinds[0], any_support)
    crdt.apply_state(state)
    logger.debug("Created %s from state", type(crdt).__name__)
    return crdt
