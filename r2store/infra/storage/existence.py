"""Object presence lookup used before destructive operations."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from botocore.exceptions import ClientError as ProviderError

from r2store.infra.storage.errors import provider_error_code, status_name

logger = logging.getLogger(__name__)

# Provider codes meaning "nothing there". Any other failure propagates.
ABSENT_ERROR_CODES: frozenset[str] = frozenset({"NoSuchBucket", "NotFound"})


def _normalized_code(exc: ProviderError) -> str:
    code = provider_error_code(exc)
    # HEAD responses have no body, so botocore reports the bare status ("404").
    if code.isdigit():
        return status_name(code) or code
    return code


def object_exists(transport: Any, bucket_name: str, key: str) -> bool:
    """Return whether ``key`` exists in ``bucket_name``.

    Args:
        transport: A boto3 S3 client (or compatible double).
        bucket_name: Bucket to look in.
        key: Object key.

    Returns:
        True when the metadata lookup succeeds, False when the provider
        reports a missing bucket or object.

    Raises:
        ValueError: If ``bucket_name`` or ``key`` is empty.
        botocore.exceptions.ClientError: For any other provider failure.
    """
    if transport is None:
        raise ValueError("transport is required")
    if not bucket_name:
        raise ValueError("bucket_name must be a non-empty string")
    if not key:
        raise ValueError("key must be a non-empty string")

    try:
        transport.head_object(Bucket=bucket_name, Key=key)
    except ProviderError as exc:
        code = _normalized_code(exc)
        if code in ABSENT_ERROR_CODES:
            logger.debug(
                "r2_object_absent bucket=%s key=%s code=%s",
                bucket_name,
                key,
                code,
                extra={"extra": {"bucket": bucket_name, "key": key, "code": code}},
            )
            return False
        raise
    return True


async def object_exists_async(transport: Any, bucket_name: str, key: str) -> bool:
    """Run :func:`object_exists` in a worker thread."""
    return await asyncio.to_thread(object_exists, transport, bucket_name, key)
