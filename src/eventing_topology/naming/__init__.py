"""Deterministic resource names derived from broker and trigger identities."""

from .name_scheme import (
    broker_dead_letter_exchange_name,
    broker_exchange_name,
    broker_resource_prefix,
    trigger_dead_letter_exchange_name,
    trigger_queue_name,
    trigger_resource_prefix,
)

__all__ = [
    "broker_dead_letter_exchange_name",
    "broker_exchange_name",
    "broker_resource_prefix",
    "trigger_dead_letter_exchange_name",
    "trigger_queue_name",
    "trigger_resource_prefix",
]
