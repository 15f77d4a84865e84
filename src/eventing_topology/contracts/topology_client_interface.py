"""Defines the contract for declaring bindings."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Optional

from eventing_topology.binding import BindingRequest


class ITopologyClient(ABC):
    """Declares resolved bindings against a live broker."""

    @abstractmethod
    def declare_binding(
        self,
        request: BindingRequest,
        *,
        broker_url: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """Declare ``request`` on the broker at ``broker_url``."""
