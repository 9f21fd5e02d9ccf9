from __future__ import annotations

import logging
import os
from contextlib import ExitStack
from typing import Iterable, Union

from mfwsclient.cancellation import CancellationToken
from mfwsclient.exceptions import InvalidArgumentError, TransportError
from mfwsclient.models import LocalFile, UploadInfo
from mfwsclient.transport import Transport, response_json
from mfwsclient.utils import run_sync

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/REST/files"

FileLike = Union[str, "os.PathLike[str]", LocalFile]


def _to_local_file(item: FileLike) -> LocalFile:
    if isinstance(item, LocalFile):
        if not item.path.is_file():
            raise InvalidArgumentError(f"Not a file: {item.path}")
        return item
    if item is None:
        raise InvalidArgumentError("files must not contain None")
    return LocalFile.from_path(item)


class UploadStager:
    """Stages local files in the service's temporary upload area."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def upload_files_async(
        self,
        files: Iterable[FileLike] | None,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[UploadInfo]:
        """Upload files to the temporary location in a single request.

        Args:
            files: Local files to stage, as paths or :class:`LocalFile`.
            cancel: Optional cancellation token.

        Returns:
            One :class:`UploadInfo` per input file, in input order. Title,
            extension and size are taken from the local file rather than the
            server's record.

        Raises:
            InvalidArgumentError: If ``files`` is None or a single path, or a
                file is missing.
            TransportError: If the request fails or the response does not hold
                one record per file.
            CancellationError: If ``cancel`` fires before the response is read.
        """
        if files is None:
            raise InvalidArgumentError("files must not be None")
        if isinstance(files, (str, bytes, os.PathLike, LocalFile)):
            raise InvalidArgumentError(
                "files must be a sequence of paths, not a single path"
            )

        local_files = [_to_local_file(f) for f in files]
        if not local_files:
            return []

        with ExitStack() as stack:
            parts = [
                (f.name, (f.name, stack.enter_context(open(f.path, "rb"))))
                for f in local_files
            ]
            response = await self._transport.request(
                "POST", UPLOAD_PATH, files=parts, cancel=cancel
            )

        records = response_json(response) or []
        if not isinstance(records, list) or len(records) != len(local_files):
            got = len(records) if isinstance(records, list) else "a non-list body"
            raise TransportError(
                f"Expected {len(local_files)} upload records, got {got}",
                url=str(response.request.url),
                status_code=response.status_code,
            )

        uploads: list[UploadInfo] = []
        for record, local_file in zip(records, local_files):
            upload = UploadInfo.from_json(record)
            upload.title = local_file.name
            upload.extension = local_file.extension
            upload.size = local_file.size
            uploads.append(upload)

        logger.info("Staged %d file(s) for upload", len(uploads))
        return uploads

    def upload_files(
        self,
        files: Iterable[FileLike] | None,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[UploadInfo]:
        """Blocking variant of :meth:`upload_files_async`."""
        return run_sync(self.upload_files_async(files, cancel=cancel))
