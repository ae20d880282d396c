"""Remote collaborator contracts and the HTTP implementation."""

from __future__ import annotations

from .http_backend import (
    AlbumResource,
    ExpenseResource,
    FileResource,
    HttpBackend,
    HttpResource,
    PhotoResource,
)
from .protocols import (
    AlbumCollaborator,
    ExpenseCollaborator,
    FileCollaborator,
    ListSource,
    PhotoCollaborator,
    ResourceCollaborator,
    StorageUsageSource,
)

__all__ = [
    "HttpBackend",
    "HttpResource",
    "FileResource",
    "PhotoResource",
    "AlbumResource",
    "ExpenseResource",
    "ListSource",
    "ResourceCollaborator",
    "StorageUsageSource",
    "FileCollaborator",
    "PhotoCollaborator",
    "AlbumCollaborator",
    "ExpenseCollaborator",
]
