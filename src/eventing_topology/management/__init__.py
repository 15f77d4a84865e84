"""Read-only access to the RabbitMQ management API."""

from .rabbitmq_binding_inspector import RabbitMQBindingInspector

__all__ = ["RabbitMQBindingInspector"]
