"""Object store client protocol.

This module defines the interface callers program against. Every
operation returns a ``ClientResult``; store-side failures never escape as
exceptions.
"""

from __future__ import annotations

from typing import Protocol

from r2store.domain.results import ClientResult
from r2store.infra.storage.sources import SourceArg


class ObjectStoreClient(Protocol):
    """Protocol defining the upload/delete surface of an object store client.

    Input contract violations (empty bucket, key, path or a missing stream)
    raise ``ValueError`` instead of producing a failed result.
    """

    def put_object(self, source: SourceArg, bucket_name: str, key: str) -> ClientResult:
        """Upload ``source`` to ``bucket_name``/``key``, blocking the caller.

        Args:
            source: Local file path, readable binary stream, or ContentSource.
            bucket_name: Target bucket name.
            key: Object key (path) in the bucket.

        Returns:
            ``ClientResult.SUCCESS`` or a failed result with mapped errors.

        Raises:
            ValueError: If any argument is missing or empty.
        """
        ...

    async def put_object_async(
        self, source: SourceArg, bucket_name: str, key: str
    ) -> ClientResult:
        """Upload ``source`` to ``bucket_name``/``key`` without blocking the loop."""
        ...

    def delete_object(self, bucket_name: str, key: str) -> ClientResult:
        """Delete an existing object, blocking the caller."""
        ...

    async def delete_object_async(self, bucket_name: str, key: str) -> ClientResult:
        """Delete an existing object.

        Returns:
            ``ClientResult.SUCCESS`` when the object was deleted, a failed
            result with the ``NotFound`` code when it does not exist, or a
            failed result with mapped errors when the delete call fails.

        Raises:
            ValueError: If any argument is missing or empty.
            ExistenceCheckError: If the existence lookup fails for a reason
                other than a missing bucket or object.
        """
        ...

    def close(self) -> None:
        """Release transport resources. Safe to call more than once."""
        ...
