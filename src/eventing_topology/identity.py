"""Identity of a broker or trigger object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Namespace, name and UID of a broker or trigger.

    ``uid`` is assumed unique and immutable for the object's lifetime, which is why
    every derived resource name embeds it.
    """

    namespace: str = ""
    name: str = ""
    uid: str = ""

    def is_empty(self) -> bool:
        return not (self.namespace or self.name or self.uid)

    def is_complete(self) -> bool:
        return bool(self.namespace and self.name and self.uid)
