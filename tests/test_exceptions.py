"""Tests for exceptions."""

import pytest

from mediahub.exceptions import (
    AdapterError,
    ConfigurationError,
    DecodeError,
    MediaHubError,
    NotFoundError,
    TransportError,
    UpstreamError,
)


class TestExceptionStatusCodes:
    """Tests for HTTP status codes on exceptions."""

    @pytest.mark.parametrize(
        ("exception_class", "expected_status"),
        [
            (MediaHubError, 500),
            (AdapterError, 502),
            (TransportError, 502),
            (DecodeError, 502),
            (NotFoundError, 404),
            (ConfigurationError, 500),
        ],
        ids=["base_error", "adapter", "transport", "decode", "not_found", "config"],
    )
    def test_exception_status_codes(
        self, exception_class: type[MediaHubError], expected_status: int
    ) -> None:
        """Each exception type should have the correct HTTP status code."""
        error = exception_class("test message")
        assert error.status_code == expected_status

    def test_upstream_error_status(self) -> None:
        """Upstream errors keep the gateway status and the upstream one."""
        error = UpstreamError("boom", http_status=503, body=b"down")
        assert error.status_code == 502
        assert error.http_status == 503
        assert error.body == b"down"


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exception_class",
        [AdapterError, NotFoundError, ConfigurationError, DecodeError],
    )
    def test_all_exceptions_inherit_from_base(
        self, exception_class: type[MediaHubError]
    ) -> None:
        """All custom exceptions should inherit from MediaHubError."""
        assert issubclass(exception_class, MediaHubError)

    @pytest.mark.parametrize(
        "exception_class",
        [TransportError, UpstreamError, DecodeError],
    )
    def test_backend_failures_are_adapter_errors(
        self, exception_class: type[MediaHubError]
    ) -> None:
        """Every backend failure can be caught as AdapterError."""
        assert issubclass(exception_class, AdapterError)

    def test_upstream_error_is_transport_error(self) -> None:
        assert issubclass(UpstreamError, TransportError)

    def test_transport_error_without_response(self) -> None:
        """A network failure carries no upstream status."""
        error = TransportError("refused")
        assert error.http_status is None
        assert error.body == b""

    def test_exception_message_attribute(self) -> None:
        """Exceptions should have message attribute and string representation."""
        error = MediaHubError("test message")
        assert error.message == "test message"
        assert str(error) == "test message"
