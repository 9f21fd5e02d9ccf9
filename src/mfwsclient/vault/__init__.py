"""File operations on vault objects.

Public API:
- VaultObjectFileOperations (stage, attach, download, rename)
- UploadStager (temporary uploads)
- AttachmentCommitter (binding staged uploads to an object version)
"""

from .committer import AttachmentCommitter, strip_extension_from_title
from .files import VaultObjectFileOperations
from .stager import UploadStager

__all__ = [
    "AttachmentCommitter",
    "UploadStager",
    "VaultObjectFileOperations",
    "strip_extension_from_title",
]
