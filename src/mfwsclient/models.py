from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .exceptions import InvalidArgumentError


@dataclass(frozen=True)
class LocalFile:
    """A file on the local filesystem, read once and then fixed."""

    path: Path
    name: str
    extension: str
    size: int

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> "LocalFile":
        p = Path(path)
        if not p.is_file():
            raise InvalidArgumentError(f"Not a file: {p}")
        return cls(
            path=p,
            name=p.name,
            # The service expects the extension without its leading dot.
            extension=p.suffix[1:],
            size=p.stat().st_size,
        )


@dataclass
class UploadInfo:
    """A file staged in the service's temporary upload area."""

    upload_id: int
    title: str | None = None
    extension: str | None = None
    size: int | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "UploadInfo":
        known = {"UploadID", "Title", "Extension", "Size"}
        return cls(
            upload_id=data.get("UploadID"),
            title=data.get("Title"),
            extension=data.get("Extension"),
            size=data.get("Size"),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_json(self) -> dict[str, Any]:
        # Keys the server sent but we do not model (e.g. TempFilePath) go back as-is.
        return {
            **self.extra,
            "UploadID": self.upload_id,
            "Title": self.title,
            "Extension": self.extension,
            "Size": self.size,
        }


@dataclass(frozen=True)
class ObjID:
    """Identifies an object by type and id."""

    type: int
    id: int


@dataclass(frozen=True)
class ObjVer:
    """Identifies a specific version of an object."""

    type: int
    id: int
    version: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ObjVer":
        return cls(type=data.get("Type"), id=data.get("ID"), version=data.get("Version"))


@dataclass
class ObjectFile:
    """A file attached to an object version."""

    id: int
    name: str | None = None
    extension: str | None = None
    version: int | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "ObjectFile":
        return cls(
            id=data.get("ID"),
            name=data.get("Name"),
            extension=data.get("Extension"),
            version=data.get("Version"),
        )


@dataclass
class ObjectVersion:
    """An object version as reported by the server.

    Only a handful of fields are mapped; the full record is kept in ``extra``.
    """

    obj_ver: ObjVer | None
    title: str | None = None
    files: list[ObjectFile] = field(default_factory=list)
    extra: Mapping[str, Any] | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> "ObjectVersion | None":
        if data is None:
            return None
        obj_ver = data.get("ObjVer")
        return cls(
            obj_ver=ObjVer.from_json(obj_ver) if obj_ver else None,
            title=data.get("Title"),
            files=[ObjectFile.from_json(f) for f in data.get("Files") or []],
            extra=data,
        )


@dataclass
class SearchResults:
    """A page of search results; ``more_results`` flags truncation."""

    items: list[ObjectVersion]
    more_results: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "SearchResults":
        return cls(
            items=[ObjectVersion.from_json(i) for i in data.get("Items") or []],
            more_results=bool(data.get("MoreResults", False)),
        )
