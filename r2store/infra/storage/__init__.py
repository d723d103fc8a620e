"""Object storage abstraction layer.

This module provides a protocol-based client for uploading to and deleting
from Cloudflare R2 and other S3-compatible services, reporting every outcome
as a ``ClientResult``.
"""

from .client import ObjectStoreClient
from .errors import (
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    ClientClosedError,
    ExistenceCheckError,
    StorageError,
    fail_errors,
    file_not_found_errors,
    to_client_errors,
)
from .existence import object_exists, object_exists_async
from .r2_client import R2Client, create_r2_client
from .sources import ContentSource, FileSource, StreamSource, as_content_source

__all__ = [
    "INTERNAL_SERVER_ERROR",
    "NOT_FOUND",
    "ClientClosedError",
    "ContentSource",
    "ExistenceCheckError",
    "FileSource",
    "ObjectStoreClient",
    "R2Client",
    "StorageError",
    "StreamSource",
    "as_content_source",
    "create_r2_client",
    "fail_errors",
    "file_not_found_errors",
    "object_exists",
    "object_exists_async",
    "to_client_errors",
]
