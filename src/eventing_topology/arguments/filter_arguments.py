"""Builds the argument table of a headers-exchange binding.

Every argument table carries ``x-match: all``, the trigger's filter attributes as
literal header values, and exactly one owner key naming the broker or trigger that
requested the binding. Messages never carry the owner key, so it does not take part
in matching; it only makes the binding attributable through broker introspection.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from eventing_topology.errors import InvalidBindingArgsError

X_MATCH_KEY = "x-match"
X_MATCH_ALL = "all"

# Literal values are read back by introspection tooling; do not change them.
BINDING_KEY = "x-knative-trigger"
TRIGGER_DLQ_BINDING_KEY = "x-knative-trigger-dlq"

OWNER_KEYS = (BINDING_KEY, TRIGGER_DLQ_BINDING_KEY)
RESERVED_KEYS = frozenset((X_MATCH_KEY,) + OWNER_KEYS)


def build_binding_arguments(
    owner_key: str,
    owner_value: str,
    attributes: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Return the ``queue_bind`` arguments for a binding owned by ``owner_value``.

    Raises:
        InvalidBindingArgsError: If ``owner_key`` is not a known owner key, the owner
            value is empty, or a filter attribute uses a reserved key.
    """
    if owner_key not in OWNER_KEYS:
        raise InvalidBindingArgsError(f"unknown binding owner key {owner_key!r}")
    if not owner_value:
        raise InvalidBindingArgsError("binding owner name must not be empty")

    arguments: Dict[str, str] = {}
    for key, value in (attributes or {}).items():
        if key in RESERVED_KEYS:
            raise InvalidBindingArgsError(
                f"filter attribute {key!r} collides with a reserved binding argument"
            )
        arguments[key] = value

    arguments[X_MATCH_KEY] = X_MATCH_ALL
    arguments[owner_key] = owner_value
    return arguments


def owner_of(arguments: Optional[Mapping[str, Any]]) -> Optional[Tuple[str, str]]:
    """Return ``(owner_key, owner_value)`` of an existing binding's arguments, if any."""
    if not arguments:
        return None
    for key in OWNER_KEYS:
        value = arguments.get(key)
        if value:
            return key, str(value)
    return None
