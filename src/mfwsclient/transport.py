from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Mapping, Protocol, Sequence

import httpx

from .cancellation import CancellationToken, raise_if_cancelled
from .config import ClientConfig
from .exceptions import CancellationError, TransportError

logger = logging.getLogger(__name__)

# (field name, (file name, open binary file)) as accepted by httpx.
FilePart = tuple[str, tuple[str, Any]]


class Transport(Protocol):
    """Protocol for issuing requests against an MFWS endpoint.

    Implementations resolve ``path`` against their configured base URL and
    return the response only for successful statuses.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Sequence[FilePart] | None = None,
        headers: Mapping[str, str] | None = None,
        cancel: CancellationToken | None = None,
    ) -> httpx.Response:
        """Send one request and return its response.

        Raises:
            TransportError: On a status >= 400 or a connection failure.
            CancellationError: If ``cancel`` fires before the response is
                handed back.
        """
        raise NotImplementedError


class HttpxTransport:
    """httpx implementation of Transport.

    A fresh ``httpx.AsyncClient`` is opened per request so no connection
    state outlives the event loop that created it.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Connection settings.
            transport: Optional low-level httpx transport, e.g.
                ``httpx.MockTransport`` in tests.
        """
        self._config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify,
            headers={"User-Agent": self._config.user_agent},
            transport=self._transport,
            follow_redirects=True,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Sequence[FilePart] | None = None,
        headers: Mapping[str, str] | None = None,
        cancel: CancellationToken | None = None,
    ) -> httpx.Response:
        raise_if_cancelled(cancel)

        url = f"{self._config.base_url}{path}"
        logger.debug("%s %s", method, url)

        async with self._client() as client:
            send = client.request(
                method, url, params=params, json=json, files=files, headers=headers
            )
            try:
                if cancel is None:
                    response = await send
                else:
                    response = await _send_or_cancel(send, cancel)
            except httpx.RequestError as exc:
                raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        raise_if_cancelled(cancel)

        if response.status_code >= 400:
            logger.debug("%s %s -> %s", method, url, response.status_code)
            raise TransportError(
                url=url, status_code=response.status_code, body=response.text
            )
        return response


async def _send_or_cancel(
    send: Awaitable[httpx.Response], cancel: CancellationToken
) -> httpx.Response:
    """Await ``send`` unless ``cancel`` fires first, in which case abandon it."""
    send_task = asyncio.ensure_future(send)
    cancel_task = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait(
            {send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        pending = [t for t in (send_task, cancel_task) if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if send_task.cancelled():
        raise CancellationError()
    return send_task.result()


def response_json(response: httpx.Response) -> Any:
    """Parse a successful response body as JSON.

    Raises:
        TransportError: If the body is not JSON, e.g. an HTML login page
            served with a success status.
    """
    try:
        return response.json()
    except ValueError as exc:
        raise TransportError(
            f"Expected a JSON body from {response.request.url}",
            url=str(response.request.url),
            status_code=response.status_code,
            body=response.text,
        ) from exc
