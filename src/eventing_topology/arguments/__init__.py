"""Header-match binding arguments built from trigger attribute filters."""

from .filter_arguments import (
    BINDING_KEY,
    OWNER_KEYS,
    TRIGGER_DLQ_BINDING_KEY,
    X_MATCH_ALL,
    X_MATCH_KEY,
    build_binding_arguments,
    owner_of,
)

__all__ = [
    "BINDING_KEY",
    "OWNER_KEYS",
    "TRIGGER_DLQ_BINDING_KEY",
    "X_MATCH_ALL",
    "X_MATCH_KEY",
    "build_binding_arguments",
    "owner_of",
]
