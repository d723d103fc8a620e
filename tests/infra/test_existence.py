"""Tests for the object existence check."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from r2store.infra.storage.existence import object_exists, object_exists_async
from tests.infra.fake_transport import FakeS3Transport, make_client_error


def test_returns_true_when_head_succeeds():
    transport = FakeS3Transport(objects={"test-bucket/a.txt": b"a"})

    assert object_exists(transport, "test-bucket", "a.txt") is True
    assert transport.calls == [("head_object", "test-bucket", "a.txt")]


def test_returns_false_for_missing_object():
    transport = FakeS3Transport()

    assert object_exists(transport, "test-bucket", "missing.txt") is False


def test_returns_false_for_missing_bucket():
    transport = FakeS3Transport()

    assert object_exists(transport, "other-bucket", "a.txt") is False


def test_returns_false_for_not_found_code():
    transport = MagicMock()
    transport.head_object.side_effect = make_client_error(
        "NotFound", 404, "Not Found", "HeadObject"
    )

    assert object_exists(transport, "bucket", "key") is False
    transport.head_object.assert_called_once_with(Bucket="bucket", Key="key")


@pytest.mark.parametrize(
    ("code", "status"),
    [("403", 403), ("AccessDenied", 403), ("SlowDown", 503), ("NoSuchKey", 404)],
)
def test_other_provider_errors_propagate(code, status):
    transport = MagicMock()
    error = make_client_error(code, status, "boom", "HeadObject")
    transport.head_object.side_effect = error

    with pytest.raises(ClientError) as exc_info:
        object_exists(transport, "bucket", "key")

    assert exc_info.value is error


def test_non_provider_errors_propagate():
    transport = MagicMock()
    transport.head_object.side_effect = ConnectionError("network down")

    with pytest.raises(ConnectionError):
        object_exists(transport, "bucket", "key")


@pytest.mark.parametrize(("bucket", "key"), [("", "key"), ("bucket", ""), (None, "key")])
def test_rejects_empty_arguments(bucket, key):
    with pytest.raises(ValueError):
        object_exists(FakeS3Transport(), bucket, key)


async def test_async_variant():
    transport = FakeS3Transport(objects={"test-bucket/a.txt": b"a"})

    assert await object_exists_async(transport, "test-bucket", "a.txt") is True
    assert await object_exists_async(transport, "test-bucket", "b.txt") is False
