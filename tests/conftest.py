from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from r2store.common.config import R2Options, get_options
from r2store.infra.storage.r2_client import R2Client
from tests.infra.fake_transport import FakeS3Transport

for _name in (
    "R2_PUBLIC_ENDPOINT",
    "R2_ENDPOINT",
    "R2_ACCESS_KEY_ID",
    "R2_SECRET_ACCESS_KEY",
    "R2_BUCKET_NAME",
):
    os.environ.pop(_name, None)


@pytest.fixture(autouse=True)
def clear_options_cache():
    get_options.cache_clear()  # type: ignore[attr-defined]
    yield
    get_options.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def options() -> R2Options:
    return R2Options(
        public_endpoint="https://cdn.example.com",
        endpoint="https://account.r2.cloudflarestorage.com",
        access_key_id="test-key",
        secret_access_key="test-secret",
        bucket_name="test-bucket",
    )


@pytest.fixture()
def transport() -> FakeS3Transport:
    return FakeS3Transport()


@pytest.fixture()
def client(options, transport):
    """R2Client wired to the in-memory transport."""
    with patch.object(R2Client, "_build_client", return_value=transport):
        r2 = R2Client(options=options)
    yield r2
    r2.close()
