"""Conflict-free Replicated Data Types (CRDTs) for state synchronization.

CRDTs converge without coordination: each replica mutates its local copy,
harvests deltas or full snapshots for its peers, and merges whatever it
receives. Merges are commutative, associative and idempotent, so message
duplication and reordering do not affect the converged result.

Provided CRDTs:

- **GSet**: Grow-only set (insert only, merge is union)

``crdt_for_state`` rebuilds a replica from a tagged state payload.
"""

from statesync.crdt.factory import CRDT_KINDS, create_crdt, crdt_for_state
from statesync.crdt.gset import GSET_KIND, GSet
from statesync.crdt.protocol import DeltaCRDT

__all__ = [
    "CRDT_KINDS",
    "DeltaCRDT",
    "GSET_KIND",
    "GSet",
    "create_crdt",
    "crdt_for_state",
]
