"""Declares resolved bindings against a live RabbitMQ broker."""

from .rabbitmq_topology_client import (
    RabbitMQTopologyClient,
    declare_dead_letter_binding,
    declare_trigger_binding,
)
from .topology_client_config import TopologyClientConfig, TopologyClientDependencies

__all__ = [
    "RabbitMQTopologyClient",
    "TopologyClientConfig",
    "TopologyClientDependencies",
    "declare_dead_letter_binding",
    "declare_trigger_binding",
]
