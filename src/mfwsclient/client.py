from __future__ import annotations

import logging
from dataclasses import dataclass

from .cancellation import CancellationToken
from .config import ClientConfig
from .exceptions import InvalidArgumentError
from .models import SearchResults
from .transport import HttpxTransport, Transport, response_json
from .utils import run_sync
from .vault.files import VaultObjectFileOperations

logger = logging.getLogger(__name__)


@dataclass
class MFWSClient:
    """Client for one M-Files Web Service endpoint.

    The client owns the configuration and the transport, and exposes
    sub-clients for operations on files (and later properties, views, etc.).
    """

    _config: ClientConfig
    _transport: Transport
    _files: VaultObjectFileOperations

    def __init__(
        self,
        base_url: str | None = None,
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The root URL of the web service, without ``/REST``.
                Ignored when ``config`` is given.
            config: Connection settings. If omitted they are built from
                ``base_url`` and the ``MFWS_*`` environment variables.
            transport: The transport used for every request. Defaults to an
                :class:`HttpxTransport` over ``config``.
        """
        if config is None:
            config = ClientConfig(base_url=base_url) if base_url else ClientConfig()

        self._config = config
        self._transport = transport or HttpxTransport(config)
        self._files = VaultObjectFileOperations(self._transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def files(self) -> VaultObjectFileOperations:
        """Return the file operations sub-client."""
        return self._files

    async def quick_search_async(
        self, query: str, *, cancel: CancellationToken | None = None
    ) -> SearchResults:
        """Run a quick (full-text) search.

        Args:
            query: The term to search for.
            cancel: Optional cancellation token.

        Returns:
            The matching object versions.
        """
        if query is None:
            raise InvalidArgumentError("query must not be None")

        response = await self._transport.request(
            "GET", "/REST/objects", params={"q": query}, cancel=cancel
        )
        results = SearchResults.from_json(response_json(response))
        logger.info("Search for %r returned %d result(s)", query, len(results.items))
        return results

    def quick_search(
        self, query: str, *, cancel: CancellationToken | None = None
    ) -> SearchResults:
        return run_sync(self.quick_search_async(query, cancel=cancel))
