"""Resolves broker and trigger references into ``queue_bind`` declarations.

``make_binding`` and ``make_dlq_binding`` are pure: they validate their input and
compute names and arguments, leaving the network call to the topology client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from eventing_topology.arguments import (
    BINDING_KEY,
    TRIGGER_DLQ_BINDING_KEY,
    build_binding_arguments,
    owner_of,
)
from eventing_topology.errors import InvalidBindingArgsError
from eventing_topology.resources import Broker, Trigger

from .dead_letter_target import (
    BrokerTarget,
    DeadLetterTarget,
    TriggerTarget,
    dead_letter_target_for,
    require_complete,
)

DESTINATION_TYPE_QUEUE = "queue"


@dataclass(frozen=True)
class BindingArgs:
    """Everything a caller knows when asking for a binding.

    ``management_port`` is carried for diagnostics only and is never used to declare.
    ``queue_name`` is the destination of dead-letter bindings; trigger bindings derive
    their queue from the trigger identity instead. ``dead_letter_target`` selects the
    dead-letter source explicitly; when omitted it is inferred from ``broker`` and
    ``trigger``.
    """

    routing_key: str = ""
    broker_url: str = ""
    management_port: Optional[int] = None
    broker: Optional[Broker] = None
    trigger: Optional[Trigger] = None
    queue_name: str = ""
    dead_letter_target: Optional[DeadLetterTarget] = None


@dataclass(frozen=True)
class BindingRequest:
    """A fully resolved binding, ready to be declared."""

    source: str
    destination: str
    routing_key: str
    arguments: Dict[str, str] = field(default_factory=dict)
    destination_type: str = DESTINATION_TYPE_QUEUE

    @property
    def owner(self) -> Optional[Tuple[str, str]]:
        return owner_of(self.arguments)


def make_binding(args: BindingArgs) -> BindingRequest:
    """Bind the broker's exchange to the trigger's subscription queue.

    Raises:
        InvalidBindingArgsError: If the broker or trigger is missing or incomplete, the
            trigger has no filter, or the trigger belongs to a different broker.
    """
    broker = args.broker
    trigger = args.trigger
    if broker is None:
        raise InvalidBindingArgsError("trigger binding requires a broker")
    if trigger is None:
        raise InvalidBindingArgsError("trigger binding requires a trigger")
    require_complete(broker.identity, "broker")
    require_complete(trigger.identity, "trigger")
    if trigger.attributes is None:
        raise InvalidBindingArgsError(
            f"trigger {trigger.name!r} has no filter attributes; use an empty mapping "
            "to match every event"
        )
    if trigger.broker and trigger.broker != broker.name:
        raise InvalidBindingArgsError(
            f"trigger {trigger.name!r} belongs to broker {trigger.broker!r}, "
            f"not {broker.name!r}"
        )

    return BindingRequest(
        source=broker.exchange_name,
        destination=trigger.queue_name,
        routing_key=args.routing_key,
        arguments=build_binding_arguments(BINDING_KEY, trigger.name, trigger.attributes),
    )


def make_dlq_binding(args: BindingArgs) -> BindingRequest:
    """Bind a broker or trigger dead-letter exchange to ``args.queue_name``.

    Raises:
        InvalidBindingArgsError: If no destination queue is given or the dead-letter
            target cannot be resolved.
    """
    if not args.queue_name:
        raise InvalidBindingArgsError("dead-letter binding requires a destination queue name")

    target = args.dead_letter_target or dead_letter_target_for(args.broker, args.trigger)

    if isinstance(target, TriggerTarget):
        require_complete(target.trigger.identity, "trigger")
        source = target.trigger.dead_letter_exchange_name
        arguments = build_binding_arguments(TRIGGER_DLQ_BINDING_KEY, target.trigger.name)
    elif isinstance(target, BrokerTarget):
        require_complete(target.broker.identity, "broker")
        source = target.broker.dead_letter_exchange_name
        arguments = build_binding_arguments(BINDING_KEY, target.broker.name)
    else:
        raise InvalidBindingArgsError(f"unsupported dead-letter target {target!r}")

    return BindingRequest(
        source=source,
        destination=args.queue_name,
        routing_key=args.routing_key,
        arguments=arguments,
    )
