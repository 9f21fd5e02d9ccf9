from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Iterable

from mfwsclient.cancellation import CancellationToken
from mfwsclient.exceptions import InvalidArgumentError, MFWSError
from mfwsclient.models import ObjectVersion, ObjID, ObjVer, UploadInfo
from mfwsclient.transport import Transport, response_json
from mfwsclient.utils import object_path, run_sync, version_segment

from .committer import AttachmentCommitter
from .stager import FileLike, UploadStager

logger = logging.getLogger(__name__)

Destination = str | os.PathLike | BinaryIO


def _resolve_target(
    target: ObjID | ObjVer | None, version: int | None
) -> tuple[int, int, int | None]:
    if target is None:
        raise InvalidArgumentError("target must not be None")
    if isinstance(target, ObjVer):
        if version is not None:
            raise InvalidArgumentError(
                "version must not be given together with an ObjVer target"
            )
        return target.type, target.id, target.version
    if isinstance(target, ObjID):
        return target.type, target.id, version
    raise InvalidArgumentError(f"Unsupported target: {target!r}")


class VaultObjectFileOperations:
    """File operations on vault objects.

    Every operation is a coroutine (``*_async``) with a blocking twin that
    waits on it.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._stager = UploadStager(transport)
        self._committer = AttachmentCommitter(transport)

    # Uploading files

    async def upload_files_async(
        self,
        files: Iterable[FileLike] | None,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[UploadInfo]:
        """Upload files to the temporary location. See :class:`UploadStager`."""
        return await self._stager.upload_files_async(files, cancel=cancel)

    def upload_files(
        self,
        files: Iterable[FileLike] | None,
        *,
        cancel: CancellationToken | None = None,
    ) -> list[UploadInfo]:
        return run_sync(self.upload_files_async(files, cancel=cancel))

    # Adding files to existing objects

    async def add_files_async(
        self,
        target: ObjID | ObjVer | None,
        files: Iterable[FileLike] | None,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> ObjectVersion | None:
        """Add local files to an existing object.

        The files are staged first and then committed to the object. If the
        commit fails the staged uploads are left for the server to expire.

        Args:
            target: The object to add the files to. An :class:`ObjVer` pins
                the version; an :class:`ObjID` uses ``version``.
            files: Local files to attach, in order.
            version: The object version for an :class:`ObjID` target, or None
                for the latest.
            cancel: Optional cancellation token, checked around each request.

        Returns:
            The updated object version.

        Raises:
            InvalidArgumentError: If ``target`` or ``files`` is None, or a
                version is given twice.
            TransportError: If either request fails.
            CancellationError: If ``cancel`` fires during either request.
        """
        object_type, object_id, version = _resolve_target(target, version)
        if files is None:
            raise InvalidArgumentError("files must not be None")

        uploads = await self._stager.upload_files_async(files, cancel=cancel)
        try:
            return await self._committer.commit_async(
                object_type, object_id, uploads, version=version, cancel=cancel
            )
        except MFWSError:
            if uploads:
                logger.warning(
                    "Commit to object %s/%s failed; %d staged upload(s) left on the server",
                    object_type,
                    object_id,
                    len(uploads),
                )
            raise

    def add_files(
        self,
        target: ObjID | ObjVer | None,
        files: Iterable[FileLike] | None,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> ObjectVersion | None:
        """Blocking variant of :meth:`add_files_async`."""
        return run_sync(
            self.add_files_async(target, files, version=version, cancel=cancel)
        )

    # Downloading files

    async def download_file_async(
        self,
        object_type: int,
        object_id: int,
        file_id: int,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> bytes:
        """Download the content of a file.

        Args:
            object_type: The id of the object type.
            object_id: The id of the object.
            file_id: The id of the file.
            version: The object version, or None for the latest.
            cancel: Optional cancellation token.

        Returns:
            The raw file content.
        """
        path = object_path(object_type, object_id, version_segment(version))
        response = await self._transport.request(
            "GET", f"{path}/files/{file_id}/content", cancel=cancel
        )
        return response.content

    def download_file(
        self,
        object_type: int,
        object_id: int,
        file_id: int,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> bytes:
        return run_sync(
            self.download_file_async(
                object_type, object_id, file_id, version=version, cancel=cancel
            )
        )

    async def download_file_to_async(
        self,
        object_type: int,
        object_id: int,
        file_id: int,
        destination: Destination,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Download a file into a local path or a writable binary stream.

        An existing file at ``destination`` is replaced.
        """
        if destination is None:
            raise InvalidArgumentError("destination must not be None")

        content = await self.download_file_async(
            object_type, object_id, file_id, version=version, cancel=cancel
        )

        if hasattr(destination, "write"):
            destination.write(content)
            return

        Path(destination).write_bytes(content)
        logger.info("Downloaded: %s", destination)

    def download_file_to(
        self,
        object_type: int,
        object_id: int,
        file_id: int,
        destination: Destination,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        run_sync(
            self.download_file_to_async(
                object_type,
                object_id,
                file_id,
                destination,
                version=version,
                cancel=cancel,
            )
        )

    # Other file operations

    async def rename_file_async(
        self,
        object_type: int,
        object_id: int,
        file_id: int,
        new_name: str,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> ObjectVersion | None:
        """Rename a file on an object.

        Without an explicit version the service's ``-1`` (latest) marker is
        used.
        """
        if not new_name:
            raise InvalidArgumentError("new_name must not be empty")

        path = object_path(object_type, object_id, version_segment(version, "-1"))
        response = await self._transport.request(
            "POST",
            f"{path}/files/{file_id}/1/rename.aspx",
            params={"_method": "PUT"},
            json={"Value": new_name},
            headers={"X-Extensions": "MFWA"},
            cancel=cancel,
        )
        logger.info("Renamed file %s on object %s/%s", file_id, object_type, object_id)
        return ObjectVersion.from_json(response_json(response))

    def rename_file(
        self,
        object_type: int,
        object_id: int,
        file_id: int,
        new_name: str,
        *,
        version: int | None = None,
        cancel: CancellationToken | None = None,
    ) -> ObjectVersion | None:
        return run_sync(
            self.rename_file_async(
                object_type, object_id, file_id, new_name, version=version, cancel=cancel
            )
        )
