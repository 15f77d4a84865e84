"""Configuration primitives for wiring a `RabbitMQTopologyClient`."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from eventing_topology.connection import RabbitMQConnection
from eventing_topology.contracts import IRabbitMQConnection

DEFAULT_MANAGEMENT_PORT = 15672
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_DECLARE_TIMEOUT = 30.0

ConnectionFactory = Callable[[str, Optional[float], Optional[threading.Event]], IRabbitMQConnection]


def _make_rabbitmq_connection(
    rabbitmq_url: str,
    connect_timeout: Optional[float],
    cancel_event: Optional[threading.Event],
) -> IRabbitMQConnection:
    return RabbitMQConnection(
        rabbitmq_url, connect_timeout=connect_timeout, cancel_event=cancel_event
    )


@dataclass(frozen=True)
class TopologyClientConfig:
    """Settings for declaring bindings.

    ``broker_url`` may be left empty when every call passes its own URL.
    """

    broker_url: str = ""
    management_port: int = DEFAULT_MANAGEMENT_PORT
    connect_timeout: Optional[float] = DEFAULT_CONNECT_TIMEOUT
    declare_timeout: Optional[float] = DEFAULT_DECLARE_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TopologyClientConfig":
        """Read ``RABBITMQ_URL``, ``RABBITMQ_MANAGEMENT_PORT``, ``TOPOLOGY_CONNECT_TIMEOUT``
        and ``TOPOLOGY_DECLARE_TIMEOUT``.

        Raises:
            ValueError: If ``RABBITMQ_URL`` is missing or a numeric setting is invalid.
        """
        env = os.environ if environ is None else environ
        broker_url = (env.get("RABBITMQ_URL") or "").strip()
        if not broker_url:
            raise ValueError("RABBITMQ_URL environment variable must be set.")

        return cls(
            broker_url=broker_url,
            management_port=_read_number(
                env, "RABBITMQ_MANAGEMENT_PORT", int, DEFAULT_MANAGEMENT_PORT
            ),
            connect_timeout=_read_number(
                env, "TOPOLOGY_CONNECT_TIMEOUT", float, DEFAULT_CONNECT_TIMEOUT
            ),
            declare_timeout=_read_number(
                env, "TOPOLOGY_DECLARE_TIMEOUT", float, DEFAULT_DECLARE_TIMEOUT
            ),
        )


def _read_number(env: Mapping[str, str], key: str, kind: Callable[[str], float], default):
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = kind(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class TopologyClientDependencies:
    """Bundles factory functions for client wiring."""

    make_connection: ConnectionFactory = field(default=_make_rabbitmq_connection)
