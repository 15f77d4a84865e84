"""Name scheme for exchanges and queues owned by brokers and triggers.

Names are ``<kind>.<namespace>.<name>[.dlx].<uid>``. The UID is always the last
segment, so the prefix ``<kind>.<namespace>.<name>.`` selects every resource that
belongs to one object.
"""

from __future__ import annotations

from typing import Optional

from eventing_topology.identity import Identity

BROKER_PREFIX = "b"
TRIGGER_PREFIX = "t"
DEAD_LETTER_SEGMENT = "dlx"
SEPARATOR = "."


def _resource_name(kind: str, identity: Identity, qualifier: Optional[str] = None) -> str:
    segments = [kind, identity.namespace, identity.name]
    if qualifier:
        segments.append(qualifier)
    segments.append(identity.uid)
    return SEPARATOR.join(segments)


def _resource_prefix(kind: str, identity: Identity) -> str:
    return SEPARATOR.join([kind, identity.namespace, identity.name]) + SEPARATOR


def broker_exchange_name(identity: Identity) -> str:
    """Exchange that accepts every event published to the broker."""
    return _resource_name(BROKER_PREFIX, identity)


def broker_dead_letter_exchange_name(identity: Identity) -> str:
    """Exchange that collects events no trigger processed at the broker level."""
    return _resource_name(BROKER_PREFIX, identity, DEAD_LETTER_SEGMENT)


def trigger_queue_name(identity: Identity) -> str:
    """Queue a trigger subscribes through."""
    return _resource_name(TRIGGER_PREFIX, identity)


def trigger_dead_letter_exchange_name(identity: Identity) -> str:
    """Exchange that collects events whose delivery to the trigger's subscriber failed."""
    return _resource_name(TRIGGER_PREFIX, identity, DEAD_LETTER_SEGMENT)


def broker_resource_prefix(identity: Identity) -> str:
    return _resource_prefix(BROKER_PREFIX, identity)


def trigger_resource_prefix(identity: Identity) -> str:
    return _resource_prefix(TRIGGER_PREFIX, identity)
