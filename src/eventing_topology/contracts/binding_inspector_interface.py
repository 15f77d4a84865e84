"""Defines the contract for reading back declared bindings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class IBindingInspector(ABC):
    """Lists the bindings that currently exist on the broker."""

    @abstractmethod
    def list_bindings(self) -> List[Dict[str, Any]]:
        """Return every binding in the inspected virtual host."""
