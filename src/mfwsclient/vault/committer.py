from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from mfwsclient.cancellation import CancellationToken
from mfwsclient.exceptions import InvalidArgumentError
from mfwsclient.models import ObjectVersion, UploadInfo
from mfwsclient.transport import Transport, response_json
from mfwsclient.utils import object_path, run_sync, version_segment

logger = logging.getLogger(__name__)


def strip_extension_from_title(title: str | None, extension: str | None) -> str | None:
    """Remove a trailing ``.<extension>`` from ``title``.

    Titles or extensions that are blank are returned untouched, as is any
    title that does not end with the extension.
    """
    if not title or not title.strip() or not extension or not extension.strip():
        return title
    if title.endswith("." + extension):
        # +1 for the dot.
        return title[: len(title) - (len(extension) + 1)]
    return title


def normalize_uploads(uploads: Sequence[UploadInfo]) -> list[UploadInfo]:
    """Return copies of ``uploads`` with extensions stripped from their titles."""
    return [
        replace(u, title=strip_extension_from_title(u.title, u.extension))
        for u in uploads
    ]


class AttachmentCommitter:
    """Binds staged uploads to an existing object version."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def commit_async(
        self,
        object_type: int,
        object_id: int,
        uploads: Sequence[UploadInfo] | None,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> ObjectVersion | None:
        """Attach previously staged uploads to an object.

        Args:
            object_type: The id of the object type.
            object_id: The id of the object.
            uploads: Staged uploads, in the order they were staged.
            version: The object version, or None for the latest.
            cancel: Optional cancellation token.

        Returns:
            The updated object version as reported by the server.
        """
        if uploads is None:
            raise InvalidArgumentError("uploads must not be None")

        payload = [u.to_json() for u in normalize_uploads(uploads)]
        path = object_path(object_type, object_id, version_segment(version))

        response = await self._transport.request(
            "POST", f"{path}/files/upload", json=payload, cancel=cancel
        )

        logger.info(
            "Attached %d file(s) to object %s/%s", len(payload), object_type, object_id
        )
        return ObjectVersion.from_json(response_json(response))

    def commit(
        self,
        object_type: int,
        object_id: int,
        uploads: Sequence[UploadInfo] | None,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> ObjectVersion | None:
        """Blocking variant of :meth:`commit_async`."""
        return run_sync(
            self.commit_async(
                object_type, object_id, uploads, version=version, cancel=cancel
            )
        )
