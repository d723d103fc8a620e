"""Tests for translating exceptions into ClientError lists."""

from __future__ import annotations

from r2store.domain.results import ClientError
from r2store.infra.storage.errors import (
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    SAVE_CHANGES_MESSAGE,
    fail_errors,
    file_not_found_errors,
    status_name,
    to_client_errors,
)
from tests.infra.fake_transport import make_client_error


def _raise_chained(outer: BaseException, inner: BaseException) -> BaseException:
    try:
        try:
            raise inner
        except BaseException as exc:
            raise outer from exc
    except BaseException as caught:
        return caught


class TestStatusName:
    def test_known_statuses(self):
        assert status_name(404) == "NotFound"
        assert status_name(403) == "Forbidden"
        assert status_name(500) == "InternalServerError"
        assert status_name("503") == "ServiceUnavailable"

    def test_unknown_values(self):
        assert status_name(None) is None
        assert status_name("NoSuchKey") is None
        assert status_name(999) is None


class TestProviderErrors:
    def test_maps_status_and_message(self):
        exc = make_client_error("AccessDenied", 403, "Access Denied")

        errors = to_client_errors(exc)

        assert errors == [ClientError(code="Forbidden", description="Access Denied")]

    def test_falls_back_to_error_code_without_status(self):
        exc = make_client_error("SlowDown", None, "Please reduce your request rate.")

        errors = to_client_errors(exc)

        assert errors[0].code == "SlowDown"
        assert errors[0].description == "Please reduce your request rate."

    def test_sentinel_message_uses_inner_cause(self):
        inner = RuntimeError("duplicate key value violates unique constraint")
        outer = _raise_chained(
            make_client_error("InternalError", 500, SAVE_CHANGES_MESSAGE), inner
        )

        errors = to_client_errors(outer)

        assert errors == [
            ClientError(
                code="InternalServerError",
                description="duplicate key value violates unique constraint",
            )
        ]

    def test_sentinel_message_without_inner_keeps_outer(self):
        exc = make_client_error("InternalError", 500, SAVE_CHANGES_MESSAGE)

        errors = to_client_errors(exc)

        assert errors[0].description == SAVE_CHANGES_MESSAGE

    def test_similar_message_is_not_unwrapped(self):
        inner = RuntimeError("inner")
        outer = _raise_chained(
            make_client_error("InternalError", 500, SAVE_CHANGES_MESSAGE + " "), inner
        )

        errors = to_client_errors(outer)

        assert errors[0].description == SAVE_CHANGES_MESSAGE + " "


class TestGenericErrors:
    def test_uses_internal_server_error_code(self):
        errors = to_client_errors(OSError("connection reset"))

        assert errors == [
            ClientError(code=INTERNAL_SERVER_ERROR, description="connection reset")
        ]

    def test_sentinel_message_uses_inner_cause(self):
        outer = _raise_chained(RuntimeError(SAVE_CHANGES_MESSAGE), ValueError("disk full"))

        errors = to_client_errors(outer)

        assert errors == [ClientError(code=INTERNAL_SERVER_ERROR, description="disk full")]

    def test_sentinel_message_with_provider_inner(self):
        inner = make_client_error("NoSuchBucket", 404, "The specified bucket does not exist.")
        outer = _raise_chained(RuntimeError(SAVE_CHANGES_MESSAGE), inner)

        errors = to_client_errors(outer)

        assert errors[0].code == INTERNAL_SERVER_ERROR
        assert errors[0].description == "The specified bucket does not exist."

    def test_sentinel_message_without_inner_keeps_outer(self):
        errors = to_client_errors(RuntimeError(SAVE_CHANGES_MESSAGE))

        assert errors[0].description == SAVE_CHANGES_MESSAGE


class TestStaticErrors:
    def test_fail_errors(self):
        assert fail_errors() == [
            ClientError(code=INTERNAL_SERVER_ERROR, description="Internal Server Error")
        ]

    def test_file_not_found_errors(self):
        assert file_not_found_errors() == [
            ClientError(code=NOT_FOUND, description="File not found.")
        ]

    def test_static_lists_are_fresh_copies(self):
        first = file_not_found_errors()
        first.clear()

        assert len(file_not_found_errors()) == 1
