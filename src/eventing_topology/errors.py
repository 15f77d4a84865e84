"""Errors raised while synthesizing and declaring bindings.

Broker failures are wrapped in ``BindingError`` subclasses whose message starts with
``DECLARE_BINDING_ERROR_PREFIX`` and keeps the broker's reply text verbatim, so callers
can match on both the prefix and broker-specific substrings such as exchange names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pika.exceptions

if TYPE_CHECKING:
    from eventing_topology.binding import BindingRequest

DECLARE_BINDING_ERROR_PREFIX = "failed to declare binding: "

NOT_FOUND = 404


class TopologyError(Exception):
    """Base class for errors raised by this package."""


class InvalidBindingArgsError(TopologyError, ValueError):
    """Binding arguments violate a precondition; no network I/O was attempted."""


class OperationCancelledError(TopologyError):
    """A connection operation was abandoned because its cancellation event fired."""


class OperationTimeoutError(TopologyError, TimeoutError):
    """A connection operation did not finish before its deadline."""


class BindingError(TopologyError):
    """A binding declaration failed."""

    def __init__(
        self,
        detail: str,
        *,
        exchange: Optional[str] = None,
        queue: Optional[str] = None,
        reply_code: Optional[int] = None,
        reply_text: Optional[str] = None,
    ) -> None:
        super().__init__(f"{DECLARE_BINDING_ERROR_PREFIX}{detail}")
        self.exchange = exchange
        self.queue = queue
        self.reply_code = reply_code
        self.reply_text = reply_text


class BindingNotFoundError(BindingError):
    """The source exchange or destination queue does not exist on the broker."""


class BindingConnectionError(BindingError):
    """The broker could not be reached, authenticated against, or kept open."""


class BindingTimeoutError(BindingConnectionError):
    """The declaration did not finish before its deadline."""


class BindingCancelledError(BindingError):
    """The caller cancelled the declaration before it finished."""


class BindingInspectionError(TopologyError):
    """The management API could not be queried for existing bindings."""


def classify_declare_error(exc: BaseException, request: "BindingRequest") -> BindingError:
    """Wrap ``exc`` raised while declaring ``request`` in the matching ``BindingError``."""
    if isinstance(exc, BindingError):
        return exc

    exchange = request.source
    queue = request.destination

    if isinstance(exc, OperationCancelledError):
        return BindingCancelledError(str(exc), exchange=exchange, queue=queue)
    if isinstance(exc, OperationTimeoutError):
        return BindingTimeoutError(str(exc), exchange=exchange, queue=queue)

    if isinstance(exc, (pika.exceptions.ChannelClosed, pika.exceptions.ConnectionClosed)):
        reply_code = exc.reply_code
        reply_text = exc.reply_text
        detail = f"Error {reply_code} ({reply_text})"
        error_class = BindingError
        if reply_code == NOT_FOUND:
            detail = f"{detail}; source exchange '{exchange}', destination queue '{queue}'"
            error_class = BindingNotFoundError
        elif isinstance(exc, pika.exceptions.ConnectionClosed):
            error_class = BindingConnectionError
        return error_class(
            detail,
            exchange=exchange,
            queue=queue,
            reply_code=reply_code,
            reply_text=reply_text,
        )

    if isinstance(exc, (pika.exceptions.AMQPConnectionError, OSError)):
        return BindingConnectionError(_describe(exc), exchange=exchange, queue=queue)

    return BindingError(_describe(exc), exchange=exchange, queue=queue)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
