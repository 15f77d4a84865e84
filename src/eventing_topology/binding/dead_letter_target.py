"""Selects which dead-letter exchange a dead-letter binding reads from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from eventing_topology.errors import InvalidBindingArgsError
from eventing_topology.identity import Identity
from eventing_topology.resources import Broker, Trigger


@dataclass(frozen=True)
class BrokerTarget:
    """Dead letters of the broker as a whole."""

    broker: Broker


@dataclass(frozen=True)
class TriggerTarget:
    """Dead letters of a single trigger."""

    trigger: Trigger


DeadLetterTarget = Union[BrokerTarget, TriggerTarget]


def require_complete(identity: Identity, kind: str) -> None:
    if not identity.is_complete():
        raise InvalidBindingArgsError(
            f"{kind} identity requires namespace, name and uid, got "
            f"namespace={identity.namespace!r} name={identity.name!r} uid={identity.uid!r}"
        )


def dead_letter_target_for(
    broker: Optional[Broker], trigger: Optional[Trigger]
) -> DeadLetterTarget:
    """Infer the dead-letter target from optional broker and trigger references.

    A trigger with a complete identity selects the trigger's dead letters; a missing
    trigger, or one whose identity is entirely empty, selects the broker's. A trigger
    identity with only some fields set is rejected rather than guessed at.
    """
    if trigger is not None and not trigger.identity.is_empty():
        require_complete(trigger.identity, "trigger")
        return TriggerTarget(trigger)

    if broker is None:
        raise InvalidBindingArgsError(
            "dead-letter binding requires a broker when no trigger is given"
        )
    require_complete(broker.identity, "broker")
    return BrokerTarget(broker)
