"""Lists declared bindings through the RabbitMQ management HTTP API.

Used for diagnostics only; declarations never consult it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx
import pika

from eventing_topology.arguments import owner_of
from eventing_topology.binding import BindingArgs
from eventing_topology.connection import redact_url
from eventing_topology.contracts import IBindingInspector
from eventing_topology.errors import BindingInspectionError
from eventing_topology.topology_client.topology_client_config import (
    DEFAULT_MANAGEMENT_PORT,
    TopologyClientConfig,
)

DEFAULT_TIMEOUT = 10.0


class RabbitMQBindingInspector(IBindingInspector):
    """Reads bindings of the virtual host named in ``broker_url``.

    Host and credentials come from the AMQP URL; only the port differs.
    """

    def __init__(
        self,
        broker_url: str,
        management_port: Optional[int] = None,
        *,
        scheme: str = "http",
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        try:
            parameters = pika.URLParameters(broker_url)
        except ValueError as exc:
            raise ValueError(f"Invalid RabbitMQ URL provided: {redact_url(broker_url)}") from exc

        port = management_port or DEFAULT_MANAGEMENT_PORT
        self.base_url = f"{scheme}://{parameters.host}:{port}/api"
        self.virtual_host = parameters.virtual_host
        self._auth = (parameters.credentials.username, parameters.credentials.password)
        self._timeout = timeout
        self._client = client
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: TopologyClientConfig, **kwargs: Any) -> "RabbitMQBindingInspector":
        """Inspect the broker a topology client is configured for."""
        if not config.broker_url:
            raise ValueError("TopologyClientConfig.broker_url must be set to inspect bindings.")
        return cls(config.broker_url, config.management_port, **kwargs)

    @classmethod
    def from_binding_args(cls, args: BindingArgs, **kwargs: Any) -> "RabbitMQBindingInspector":
        """Inspect the broker a binding request was declared against."""
        if not args.broker_url:
            raise ValueError("BindingArgs.broker_url must be set to inspect bindings.")
        return cls(args.broker_url, args.management_port, **kwargs)

    def list_bindings(self) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/bindings/{quote(self.virtual_host, safe='')}"
        self.logger.debug("Fetching bindings from %s", url)
        try:
            if self._client is not None:
                response = self._client.get(url, auth=self._auth, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url, auth=self._auth)
            response.raise_for_status()
            bindings = response.json()
        except httpx.HTTPStatusError as exc:
            raise BindingInspectionError(
                f"management API returned {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BindingInspectionError(f"management API request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise BindingInspectionError(f"management API returned invalid JSON for {url}") from exc

        if not isinstance(bindings, list):
            raise BindingInspectionError(f"management API returned unexpected payload for {url}")
        return bindings

    def find_bindings(
        self,
        *,
        source: Optional[str] = None,
        destination: Optional[str] = None,
        source_prefix: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Filter ``list_bindings`` by exact source/destination or a source name prefix."""
        matches = []
        for binding in self.list_bindings():
            binding_source = binding.get("source", "")
            if source is not None and binding_source != source:
                continue
            if destination is not None and binding.get("destination") != destination:
                continue
            if source_prefix is not None and not binding_source.startswith(source_prefix):
                continue
            matches.append(binding)
        return matches

    @staticmethod
    def owner_of(binding: Dict[str, Any]) -> Optional[Tuple[str, str]]:
        return owner_of(binding.get("arguments"))
