"""Binding declarations resolved from broker and trigger identities."""

from .binding_request import (
    DESTINATION_TYPE_QUEUE,
    BindingArgs,
    BindingRequest,
    make_binding,
    make_dlq_binding,
)
from .dead_letter_target import (
    BrokerTarget,
    DeadLetterTarget,
    TriggerTarget,
    dead_letter_target_for,
)

__all__ = [
    "DESTINATION_TYPE_QUEUE",
    "BindingArgs",
    "BindingRequest",
    "BrokerTarget",
    "DeadLetterTarget",
    "TriggerTarget",
    "dead_letter_target_for",
    "make_binding",
    "make_dlq_binding",
]
