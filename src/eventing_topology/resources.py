"""Broker and trigger objects as seen by the topology synthesizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from eventing_topology.identity import Identity
from eventing_topology.naming import (
    broker_dead_letter_exchange_name,
    broker_exchange_name,
    trigger_dead_letter_exchange_name,
    trigger_queue_name,
)


@dataclass(frozen=True)
class Broker:
    """A broker owns a primary exchange and a dead-letter exchange."""

    identity: Identity

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def exchange_name(self) -> str:
        return broker_exchange_name(self.identity)

    @property
    def dead_letter_exchange_name(self) -> str:
        return broker_dead_letter_exchange_name(self.identity)


@dataclass(frozen=True)
class Trigger:
    """A trigger subscribes to the events of ``broker`` that match ``attributes``.

    ``attributes`` of ``None`` means the filter was never set; an empty mapping
    matches every event.
    """

    identity: Identity
    broker: str = ""
    attributes: Optional[Mapping[str, str]] = None

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def queue_name(self) -> str:
        return trigger_queue_name(self.identity)

    @property
    def dead_letter_exchange_name(self) -> str:
        return trigger_dead_letter_exchange_name(self.identity)
