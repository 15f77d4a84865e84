"""Defines the contract for RabbitMQ connections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Callable, Optional, Type, TypeVar

from pika.adapters.blocking_connection import BlockingChannel

T = TypeVar("T")


class IRabbitMQConnection(ABC):
    """Represents a RabbitMQ connection capable of producing blocking channels."""

    @abstractmethod
    def connect(self) -> BlockingChannel:
        """Return an open blocking channel ready for topology operations."""

    @abstractmethod
    def run(
        self,
        operation: Callable[[BlockingChannel], T],
        *,
        timeout: Optional[float] = None,
    ) -> T:
        """Run ``operation`` on a fresh channel and release the connection afterwards."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection and associated resources."""

    @abstractmethod
    def __enter__(self) -> IRabbitMQConnection:
        """Enter a managed connection context."""

    @abstractmethod
    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Exit a managed connection context."""
