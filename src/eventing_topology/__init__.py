"""Synthesizes RabbitMQ bindings for brokers and triggers.

Brokers publish into headers exchanges; each trigger subscribes through a queue bound
to its broker's exchange with ``x-match: all`` arguments built from its filter.
Dead-letter exchanges of brokers and triggers are bound to caller-supplied queues.
"""

from .arguments import BINDING_KEY, TRIGGER_DLQ_BINDING_KEY, build_binding_arguments
from .binding import (
    BindingArgs,
    BindingRequest,
    BrokerTarget,
    DeadLetterTarget,
    TriggerTarget,
    make_binding,
    make_dlq_binding,
)
from .connection import RabbitMQConnection
from .contracts import IBindingInspector, IRabbitMQConnection, ITopologyClient
from .errors import (
    DECLARE_BINDING_ERROR_PREFIX,
    BindingCancelledError,
    BindingConnectionError,
    BindingError,
    BindingInspectionError,
    BindingNotFoundError,
    BindingTimeoutError,
    InvalidBindingArgsError,
    TopologyError,
)
from .identity import Identity
from .management import RabbitMQBindingInspector
from .resources import Broker, Trigger
from .topology_client import (
    RabbitMQTopologyClient,
    TopologyClientConfig,
    TopologyClientDependencies,
    declare_dead_letter_binding,
    declare_trigger_binding,
)

__all__ = [
    "BINDING_KEY",
    "DECLARE_BINDING_ERROR_PREFIX",
    "TRIGGER_DLQ_BINDING_KEY",
    "BindingArgs",
    "BindingCancelledError",
    "BindingConnectionError",
    "BindingError",
    "BindingInspectionError",
    "BindingNotFoundError",
    "BindingRequest",
    "BindingTimeoutError",
    "Broker",
    "BrokerTarget",
    "DeadLetterTarget",
    "IBindingInspector",
    "IRabbitMQConnection",
    "ITopologyClient",
    "Identity",
    "InvalidBindingArgsError",
    "RabbitMQBindingInspector",
    "RabbitMQConnection",
    "RabbitMQTopologyClient",
    "TopologyClientConfig",
    "TopologyClientDependencies",
    "TopologyError",
    "Trigger",
    "TriggerTarget",
    "build_binding_arguments",
    "declare_dead_letter_binding",
    "declare_trigger_binding",
    "make_binding",
    "make_dlq_binding",
]
