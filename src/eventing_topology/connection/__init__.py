"""RabbitMQ connection management."""

from .rabbitmq_connection import RabbitMQConnection, redact_url

__all__ = ["RabbitMQConnection", "redact_url"]
