"""RabbitMQ connection management."""

from __future__ import annotations

import logging
import os
import threading
import time
from types import TracebackType
from typing import Any, Callable, Dict, Optional, Type, TypeVar
from urllib.parse import urlsplit, urlunsplit

import pika
from pika.adapters.blocking_connection import BlockingChannel, BlockingConnection
from pika.connection import Parameters

from eventing_topology.contracts import IRabbitMQConnection
from eventing_topology.errors import OperationCancelledError, OperationTimeoutError

T = TypeVar("T")

DEFAULT_CONNECT_TIMEOUT = 10.0
POLL_INTERVAL = 0.05


def redact_url(url: str) -> str:
    """Return ``url`` with the password replaced, for logging."""
    parts = urlsplit(url)
    userinfo, separator, hostinfo = parts.netloc.rpartition("@")
    if not separator or ":" not in userinfo:
        return url
    username = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{username}:***@{hostinfo}"))


class RabbitMQConnection(IRabbitMQConnection):
    """Manages lifecycle of a blocking RabbitMQ connection.

    ``connect_timeout`` bounds socket connect, the AMQP handshake and blocked-connection
    waits. ``cancel_event`` is observed by ``run``: once it is set the caller stops
    waiting, the worker skips any operation it has not yet started, and the
    connection is released as soon as the in-flight call returns.
    """

    def __init__(
        self,
        rabbitmq_url: Optional[str] = None,
        *,
        connect_timeout: Optional[float] = DEFAULT_CONNECT_TIMEOUT,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        url = (rabbitmq_url or os.getenv("RABBITMQ_URL") or "").strip()
        if not url:
            raise ValueError(
                "RabbitMQ URL must be provided via argument or RABBITMQ_URL environment variable."
            )

        try:
            self._parameters: Parameters = pika.URLParameters(url)
        except ValueError as exc:
            raise ValueError(f"Invalid RabbitMQ URL provided: {redact_url(url)}") from exc

        if connect_timeout is not None:
            self._parameters.socket_timeout = connect_timeout
            self._parameters.stack_timeout = connect_timeout
            self._parameters.blocked_connection_timeout = connect_timeout

        self.rabbitmq_url = url
        self.connection: Optional[BlockingConnection] = None
        self.channel: Optional[BlockingChannel] = None
        self.logger = logging.getLogger(__name__)
        self._cancel_event = cancel_event
        self._worker: Optional[threading.Thread] = None

    def connect(self) -> BlockingChannel:
        self._raise_if_cancelled()
        if self.connection is None or self.connection.is_closed:
            self.logger.info("Connecting to RabbitMQ at %s", redact_url(self.rabbitmq_url))
            try:
                self.connection = pika.BlockingConnection(self._parameters)
            except pika.exceptions.AMQPConnectionError as exc:
                self.logger.error("Failed to establish RabbitMQ connection: %s", exc)
                raise

            self.channel = self.connection.channel()
            self.logger.info("Connected to RabbitMQ.")

        if self.channel is None or self.channel.is_closed:
            self.logger.debug("Re-opening channel for RabbitMQ connection.")
            self.channel = self.connection.channel()

        return self.channel

    def run(
        self,
        operation: Callable[[BlockingChannel], T],
        *,
        timeout: Optional[float] = None,
    ) -> T:
        """Run ``operation`` on a fresh channel in a worker thread.

        The calling thread waits for the worker, the cancellation event and the
        deadline, whichever comes first, polling every ``POLL_INTERVAL`` seconds, so a
        cancellation is noticed up to that much late. The worker re-checks both after
        connecting and never starts ``operation`` once the caller has given up; an
        operation already started runs to completion. The worker always closes the
        connection.

        Raises:
            OperationCancelledError: The cancellation event fired first.
            OperationTimeoutError: ``timeout`` seconds passed first.
        """
        self._raise_if_cancelled()

        outcome: Dict[str, Any] = {}
        finished = threading.Event()
        abandoned = threading.Event()
        gate = threading.Lock()
        deadline = None if timeout is None else time.monotonic() + timeout

        def work() -> None:
            try:
                channel = self.connect()
                with gate:
                    if abandoned.is_set():
                        raise OperationCancelledError("caller stopped waiting after connect")
                    self._raise_if_cancelled()
                    if deadline is not None and time.monotonic() >= deadline:
                        raise OperationTimeoutError(f"connect exceeded the {timeout}s deadline")
                outcome["result"] = operation(channel)
            except BaseException as exc:
                outcome["error"] = exc
            finally:
                try:
                    self.close()
                finally:
                    finished.set()

        self._worker = threading.Thread(target=work, name="rabbitmq-topology-call", daemon=True)
        self._worker.start()

        while not finished.wait(POLL_INTERVAL):
            if self._cancel_event is not None and self._cancel_event.is_set():
                self._abandon(gate, abandoned)
                self.logger.warning(
                    "RabbitMQ operation cancelled; connection will be released when the call returns."
                )
                raise OperationCancelledError("operation cancelled before completion")
            if deadline is not None and time.monotonic() >= deadline:
                self._abandon(gate, abandoned)
                self.logger.warning("RabbitMQ operation exceeded its %.1fs deadline.", timeout)
                raise OperationTimeoutError(f"operation did not complete within {timeout}s")

        if "error" in outcome:
            raise outcome["error"]
        return outcome["result"]

    def close(self) -> None:
        if self.channel and not self.channel.is_closed:
            try:
                self.channel.close()
                self.logger.info("Closed RabbitMQ channel.")
            except pika.exceptions.AMQPError as exc:
                self.logger.warning("Error closing RabbitMQ channel: %s", exc)

        if self.connection and not self.connection.is_closed:
            try:
                self.connection.close()
                self.logger.info("Closed RabbitMQ connection.")
            except pika.exceptions.AMQPError as exc:
                self.logger.warning("Error closing RabbitMQ connection: %s", exc)

    @staticmethod
    def _abandon(gate: threading.Lock, abandoned: threading.Event) -> None:
        with gate:
            abandoned.set()

    def _raise_if_cancelled(self) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise OperationCancelledError("operation cancelled before it started")

    def __enter__(self) -> RabbitMQConnection:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
