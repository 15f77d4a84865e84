"""RabbitMQ implementation of the topology client."""

from __future__ import annotations

import logging
import threading
from typing import Optional

import pika.exceptions

from eventing_topology.binding import BindingArgs, BindingRequest, make_binding, make_dlq_binding
from eventing_topology.contracts import ITopologyClient
from eventing_topology.errors import (
    OperationCancelledError,
    OperationTimeoutError,
    classify_declare_error,
)

from .topology_client_config import TopologyClientConfig, TopologyClientDependencies

DECLARE_FAILURES = (
    pika.exceptions.AMQPError,
    OperationCancelledError,
    OperationTimeoutError,
    OSError,
)


class RabbitMQTopologyClient(ITopologyClient):
    """Declares one binding per call over a connection opened for that call.

    The client keeps no state between calls; redeclaring an identical binding is a
    no-op on the broker, so callers may retry freely.
    """

    def __init__(
        self,
        *,
        config: Optional[TopologyClientConfig] = None,
        dependencies: Optional[TopologyClientDependencies] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or TopologyClientConfig()
        self.dependencies = dependencies or TopologyClientDependencies()
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_env(
        cls, *, dependencies: Optional[TopologyClientDependencies] = None
    ) -> "RabbitMQTopologyClient":
        return cls(config=TopologyClientConfig.from_env(), dependencies=dependencies)

    def declare_binding(
        self,
        request: BindingRequest,
        *,
        broker_url: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        url = broker_url or self.config.broker_url
        connection = self.dependencies.make_connection(
            url, self.config.connect_timeout, cancel_event
        )

        self.logger.info(
            "Declaring binding %s -> %s (%s)",
            request.source,
            request.destination,
            request.destination_type,
        )
        self.logger.debug("Binding arguments for %s: %s", request.destination, request.arguments)

        try:
            connection.run(
                lambda channel: channel.queue_bind(
                    queue=request.destination,
                    exchange=request.source,
                    routing_key=request.routing_key,
                    arguments=dict(request.arguments),
                ),
                timeout=self.config.declare_timeout,
            )
        except DECLARE_FAILURES as exc:
            error = classify_declare_error(exc, request)
            self.logger.error("%s", error)
            raise error from exc

        self.logger.info("Declared binding %s -> %s", request.source, request.destination)


def declare_trigger_binding(
    args: BindingArgs,
    *,
    client: Optional[ITopologyClient] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BindingRequest:
    """Bind the broker's exchange to the trigger's queue and return the declared request.

    Invalid arguments raise ``InvalidBindingArgsError`` before any connection is opened.
    """
    request = make_binding(args)
    (client or RabbitMQTopologyClient()).declare_binding(
        request, broker_url=args.broker_url, cancel_event=cancel_event
    )
    return request


def declare_dead_letter_binding(
    args: BindingArgs,
    *,
    client: Optional[ITopologyClient] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BindingRequest:
    """Bind a broker or trigger dead-letter exchange to ``args.queue_name``."""
    request = make_dlq_binding(args)
    (client or RabbitMQTopologyClient()).declare_binding(
        request, broker_url=args.broker_url, cancel_event=cancel_event
    )
    return request
