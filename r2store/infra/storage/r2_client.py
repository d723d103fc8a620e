"""Cloudflare R2 storage client implementation.

This module provides an ``ObjectStoreClient`` backed by boto3's S3 client,
pointed at an R2 (or any S3-compatible) endpoint. Every upload and delete
returns a ``ClientResult``; provider failures are mapped through
``to_client_errors`` instead of being raised.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Any
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError as ProviderError

from r2store.common.config import R2Options, get_options
from r2store.domain.results import ClientResult
from r2store.infra.observability.metrics import record_operation
from r2store.infra.storage.errors import (
    ClientClosedError,
    ExistenceCheckError,
    file_not_found_errors,
    to_client_errors,
)
from r2store.infra.storage.existence import object_exists
from r2store.infra.storage.sources import ContentSource, SourceArg, as_content_source

logger = logging.getLogger(__name__)


def _require(value: str | None, name: str) -> str:
    if not value:
        raise ValueError(f"{name} must be a non-empty string")
    return value


class R2Client:
    """S3-compatible client for Cloudflare R2.

    One boto3 client is created per instance and shared by all operations,
    sync and async alike. Call ``close()`` (or use the instance as a context
    manager) to release it.
    """

    def __init__(self, *, options: R2Options) -> None:
        """Validate options and build the transport.

        Args:
            options: R2 connection options.

        Raises:
            ValueError: If a required option is missing or empty.
        """
        if options is None:
            raise ValueError("options is required")
        missing = options.missing_fields()
        if missing:
            raise ValueError(f"R2Options.{missing[0]} must be a non-empty string")

        self._options = options
        self._client = self._build_client(options)
        self._closed = False
        self._close_lock = threading.Lock()
        logger.info(
            "r2_client_initialized endpoint=%s bucket=%s",
            options.endpoint,
            options.bucket_name,
            extra={"extra": {"endpoint": options.endpoint, "bucket": options.bucket_name}},
        )

    @staticmethod
    def _build_client(options: R2Options) -> Any:
        """Create a boto3 S3 client from options."""
        addressing_style = (options.addressing_style or "path").strip().lower()
        # R2 does not require a signed payload checksum.
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": addressing_style, "payload_signing_enabled": False},
        )
        return boto3.client(
            "s3",
            endpoint_url=options.endpoint,
            region_name=options.region,
            aws_access_key_id=options.access_key_id,
            aws_secret_access_key=options.secret_access_key,
            config=config,
        )

    @property
    def options(self) -> R2Options:
        return self._options

    @property
    def bucket_name(self) -> str | None:
        """Default bucket from options, if one was configured."""
        return self._options.bucket_name

    @property
    def public_endpoint(self) -> str:
        return self._options.public_endpoint or ""

    @property
    def closed(self) -> bool:
        return self._closed

    def public_url(self, key: str) -> str:
        """Return the public URL of ``key`` under the configured public endpoint."""
        _require(key, "key")
        return f"{self.public_endpoint.rstrip('/')}/{quote(key.lstrip('/'), safe='/')}"

    # -- uploads -----------------------------------------------------------

    def put_object(self, source: SourceArg, bucket_name: str, key: str) -> ClientResult:
        """Upload a local file or binary stream, blocking the caller."""
        content = self._validate_put(source, bucket_name, key)
        return self._put(content, bucket_name, key)

    async def put_object_async(
        self, source: SourceArg, bucket_name: str, key: str
    ) -> ClientResult:
        """Upload a local file or binary stream from a worker thread."""
        content = self._validate_put(source, bucket_name, key)
        return await asyncio.to_thread(self._put, content, bucket_name, key)

    @staticmethod
    def _validate_put(source: SourceArg, bucket_name: str, key: str) -> ContentSource:
        content = as_content_source(source)
        _require(bucket_name, "bucket_name")
        _require(key, "key")
        return content

    def _put(self, content: ContentSource, bucket_name: str, key: str) -> ClientResult:
        self._ensure_open()
        started = time.perf_counter()
        try:
            with content.open() as body:
                self._client.upload_fileobj(body, bucket_name, key)
        except ProviderError as exc:
            return self._provider_failure("put", exc, bucket_name, key, started)
        except Exception as exc:
            return self._unexpected_failure("put", exc, bucket_name, key, started)

        record_operation("put", "succeeded", time.perf_counter() - started)
        logger.debug(
            "r2_put_succeeded bucket=%s key=%s source=%s",
            bucket_name,
            key,
            content.describe(),
            extra={"extra": {"bucket": bucket_name, "key": key}},
        )
        return ClientResult.SUCCESS

    # -- deletes -----------------------------------------------------------

    def delete_object(self, bucket_name: str, key: str) -> ClientResult:
        """Delete an existing object, blocking the caller."""
        _require(bucket_name, "bucket_name")
        _require(key, "key")
        return self._delete(bucket_name, key)

    async def delete_object_async(self, bucket_name: str, key: str) -> ClientResult:
        """Delete an existing object from a worker thread.

        The existence check and the delete are two separate requests; an
        object removed by someone else in between is still reported as
        deleted.
        """
        _require(bucket_name, "bucket_name")
        _require(key, "key")
        return await asyncio.to_thread(self._delete, bucket_name, key)

    def _delete(self, bucket_name: str, key: str) -> ClientResult:
        self._ensure_open()
        started = time.perf_counter()
        try:
            exists = object_exists(self._client, bucket_name, key)
        except Exception as exc:
            record_operation("delete", "error", time.perf_counter() - started)
            logger.error(
                "r2_existence_check_failed bucket=%s key=%s error=%s",
                bucket_name,
                key,
                exc,
                extra={"extra": {"bucket": bucket_name, "key": key}},
            )
            raise ExistenceCheckError(
                f"Failed to check existence of {bucket_name}/{key}: {exc}"
            ) from exc

        if not exists:
            record_operation("delete", "not_found", time.perf_counter() - started)
            logger.info(
                "r2_delete_skipped_missing bucket=%s key=%s",
                bucket_name,
                key,
                extra={"extra": {"bucket": bucket_name, "key": key}},
            )
            return ClientResult.failed(file_not_found_errors())

        try:
            self._client.delete_object(Bucket=bucket_name, Key=key)
        except ProviderError as exc:
            return self._provider_failure("delete", exc, bucket_name, key, started)
        except Exception as exc:
            return self._unexpected_failure("delete", exc, bucket_name, key, started)

        record_operation("delete", "succeeded", time.perf_counter() - started)
        logger.debug(
            "r2_delete_succeeded bucket=%s key=%s",
            bucket_name,
            key,
            extra={"extra": {"bucket": bucket_name, "key": key}},
        )
        return ClientResult.SUCCESS

    # -- failure reporting -------------------------------------------------

    def _provider_failure(
        self,
        operation: str,
        exc: ProviderError,
        bucket_name: str,
        key: str,
        started: float,
    ) -> ClientResult:
        result = ClientResult.failed(to_client_errors(exc))
        record_operation(operation, "failed", time.perf_counter() - started)
        logger.warning(
            "r2_%s_failed bucket=%s key=%s result=%s",
            operation,
            bucket_name,
            key,
            result,
            extra={
                "extra": {
                    "bucket": bucket_name,
                    "key": key,
                    "codes": [error.code for error in result.errors],
                }
            },
        )
        return result

    def _unexpected_failure(
        self,
        operation: str,
        exc: Exception,
        bucket_name: str,
        key: str,
        started: float,
    ) -> ClientResult:
        result = ClientResult.failed(to_client_errors(exc))
        record_operation(operation, "error", time.perf_counter() - started)
        logger.error(
            "r2_%s_error bucket=%s key=%s error=%s",
            operation,
            bucket_name,
            key,
            exc,
            exc_info=exc,
            extra={"extra": {"bucket": bucket_name, "key": key}},
        )
        return result

    # -- lifecycle ---------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("R2 client has been closed")

    def close(self) -> None:
        """Close the underlying boto3 client. Later calls do nothing."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._client.close()
        logger.debug("r2_client_closed endpoint=%s", self._options.endpoint)

    def __enter__(self) -> "R2Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "R2Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


def create_r2_client(options: R2Options | None = None) -> R2Client:
    """Build an ``R2Client`` from ``options`` or from the environment."""
    return R2Client(options=options or get_options())
