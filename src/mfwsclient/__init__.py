"""Client library for the M-Files Web Service REST API.

Public API:
- MFWSClient (entry point; ``client.files`` for file operations)
- ClientConfig (settings)
- CancellationToken
- models: LocalFile, UploadInfo, ObjID, ObjVer, ObjectVersion, ObjectFile, SearchResults
- errors: MFWSError, InvalidArgumentError, TransportError, CancellationError
"""

from .cancellation import CancellationToken
from .client import MFWSClient
from .config import ClientConfig
from .exceptions import (
    CancellationError,
    InvalidArgumentError,
    MFWSError,
    TransportError,
)
from .models import (
    LocalFile,
    ObjectFile,
    ObjectVersion,
    ObjID,
    ObjVer,
    SearchResults,
    UploadInfo,
)
from .transport import HttpxTransport, Transport

__all__ = [
    "CancellationError",
    "CancellationToken",
    "ClientConfig",
    "HttpxTransport",
    "InvalidArgumentError",
    "LocalFile",
    "MFWSClient",
    "MFWSError",
    "ObjID",
    "ObjVer",
    "ObjectFile",
    "ObjectVersion",
    "SearchResults",
    "Transport",
    "TransportError",
    "UploadInfo",
]
