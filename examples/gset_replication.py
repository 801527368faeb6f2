"""G-Set replication demo: delta exchange, duplication, and snapshot resync.

Architecture::

    Writes ──► replica-A ◄──deltas──► replica-B ◄── Writes
                   │
                   └──snapshot──► replica-C (rehydrated)

Demonstrates:
1. Both replicas accept writes independently (no coordination).
2. Deltas are delivered twice and out of order; replicas still converge.
3. A new replica is built from an authoritative snapshot.
4. Taking a snapshot discards the pending delta.
"""

import logging

import statesync
from statesync import GSet, crdt_for_state

logger = logging.getLogger("statesync.examples.gset_replication")


def main():
    statesync.enable_console_logging(level="DEBUG")

    replica_a = GSet()
    replica_b = GSet()

    # --- Phase 1: independent writes ---
    replica_a.add("page:/home").add("page:/about")
    replica_b.add("page:/about").add({"page": "/pricing", "variant": "b"})

    delta_a = replica_a.get_and_reset_delta()
    delta_b = replica_b.get_and_reset_delta()

    # --- Phase 2: duplicated, reordered delivery ---
    replica_a.apply_delta(delta_b)
    replica_a.apply_delta(delta_b)
    replica_b.apply_delta(delta_a)

    logger.info("replica-A: %s", replica_a)
    logger.info("replica-B: %s", replica_b)
    assert replica_a.size == replica_b.size == 3

    # --- Phase 3: rehydrate a new replica from a snapshot ---
    replica_a.add("page:/contact")
    snapshot = replica_a.get_state_and_reset_delta()
    assert replica_a.get_and_reset_delta() is None

    replica_c = crdt_for_state(snapshot)
    logger.info("replica-C: %s", replica_c)
    assert replica_c.size == 4

    print(f"Converged: A={replica_a.size} B={replica_b.size} C={replica_c.size}")


if __name__ == "__main__":
    main()
