from __future__ import annotations

import asyncio
import threading

from .exceptions import CancellationError


class CancellationToken:
    """A cancellation signal shared between a caller and an operation.

    The flag is a :class:`threading.Event`, so a token can be fired from any
    thread, including while a blocking method waits on its own event loop.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Signal cancellation. Idempotent."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancellationError` if the token has fired."""
        if self._event.is_set():
            raise CancellationError()

    async def wait(self, poll_interval: float = 0.05) -> None:
        """Return once the token has fired.

        Polls every ``poll_interval`` seconds. The flag is a
        :class:`threading.Event` that may be set from another thread, which
        cannot wake an :class:`asyncio.Event` on this loop directly.
        """
        while not self._event.is_set():
            await asyncio.sleep(poll_interval)


def raise_if_cancelled(token: CancellationToken | None) -> None:
    if token is not None:
        token.raise_if_cancelled()
