"""Contract interfaces for topology synthesis."""

from .binding_inspector_interface import IBindingInspector
from .rabbitmq_connection_interface import IRabbitMQConnection
from .topology_client_interface import ITopologyClient

__all__ = [
    "IBindingInspector",
    "IRabbitMQConnection",
    "ITopologyClient",
]
