"""Protocol definition for delta-state CRDTs.

The state-synchronization layer drives every CRDT through the same four
calls: harvest a delta, apply a peer's delta, harvest a full state, and
resynchronize from a full state. Delta merges must be:

- **Commutative**: applying delta A then B equals B then A
- **Associative**: grouping of delta applications does not matter
- **Idempotent**: applying the same delta twice equals applying it once

These properties let replicas converge regardless of message duplication,
reordering or resend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from statesync.any_support import AnySupport


@runtime_checkable
class DeltaCRDT(Protocol):
    """Protocol for CRDTs replicated through deltas and snapshots."""

    def get_and_reset_delta(self) -> dict | None:
        """Return changes made since the last harvest, or None if there are none.

        The pending delta is cleared.
        """
        ...

    def apply_delta(self, delta: dict, any_support: AnySupport | None = None) -> None:
        """Merge a delta received from another replica."""
        ...

    def get_state_and_reset_delta(self) -> dict:
        """Return the full current state and discard any pending delta."""
        ...

    def apply_state(self, state: dict, any_support: AnySupport | None = None) -> None:
        """Replace the current value with an authoritative full state."""
        ...
