"""Unit tests for confluence_client.errors module."""

import pytest
from requests.exceptions import ConnectionError

from src.confluence_client.errors import (
    ConfigurationError,
    ConfluenceError,
    ErrorKind,
    GatewayError,
    InvalidCredentialsError,
    NetworkError,
    NormalizationError,
    ResourceNotFoundError,
    ServerError,
    UnknownError,
    ValidationError,
)


class TestGatewayError:
    """Test cases for the GatewayError base exception."""

    def test_is_exception(self):
        assert issubclass(GatewayError, Exception)

    @pytest.mark.parametrize("error_class", [
        ConfigurationError,
        NormalizationError,
        ConfluenceError,
    ])
    def test_application_errors_inherit_from_gateway_error(self, error_class):
        assert issubclass(error_class, GatewayError)

    def test_message_is_preserved(self):
        """ConfluenceError preserves the error message."""
        with pytest.raises(ConfluenceError) as exc_info:
            raise ConfluenceError("custom message")
        assert str(exc_info.value) == "custom message"


class TestResourceNotFoundError:
    """Test cases for ResourceNotFoundError."""

    def test_message_names_resource(self):
        error = ResourceNotFoundError("abc-123")
        assert str(error) == "Content not found: abc-123"

    def test_attributes(self):
        error = ResourceNotFoundError("abc-123")

        assert error.resource_id == "abc-123"
        assert error.status == 404
        assert error.kind is ErrorKind.NOT_FOUND


class TestValidationError:
    """Test cases for ValidationError."""

    def test_message_format(self):
        error = ValidationError("Space not found", 400)
        assert str(error) == "Confluence API Error: Space not found (Status: 400)"

    def test_attributes(self):
        error = ValidationError("Version conflict", 409)

        assert error.message == "Version conflict"
        assert error.status == 409
        assert error.kind is ErrorKind.VALIDATION


class TestInvalidCredentialsError:
    """Test cases for InvalidCredentialsError."""

    def test_is_a_validation_error(self):
        """Auth failures are client-side rejections."""
        assert issubclass(InvalidCredentialsError, ValidationError)
        assert InvalidCredentialsError("Unauthorized").kind is ErrorKind.VALIDATION

    def test_default_status(self):
        assert InvalidCredentialsError("Unauthorized").status == 401

    def test_forbidden_status(self):
        error = InvalidCredentialsError("Forbidden", 403)
        assert "(Status: 403)" in str(error)


class TestServerError:
    """Test cases for ServerError."""

    def test_message_format_and_kind(self):
        error = ServerError("Internal Server Error", 500)

        assert str(error) == "Confluence API Error: Internal Server Error (Status: 500)"
        assert error.kind is ErrorKind.SERVER
        assert error.status == 500


class TestNetworkError:
    """Test cases for NetworkError."""

    def test_wraps_cause(self):
        cause = ConnectionError("Name or service not known")
        error = NetworkError(cause)

        assert error.cause is cause
        assert "Name or service not known" in str(error)
        assert error.kind is ErrorKind.NETWORK

    def test_has_no_status(self):
        assert NetworkError(ConnectionError("down")).status is None


class TestUnknownError:
    """Test cases for UnknownError."""

    def test_default_message(self):
        error = UnknownError()

        assert str(error) == "Unknown error occurred"
        assert error.status is None
        assert error.kind is ErrorKind.UNKNOWN

    def test_message_with_status(self):
        error = UnknownError("Redirected", 302)
        assert str(error) == "Redirected (Status: 302)"


class TestErrorKindCoverage:
    """Every service exception maps to exactly one kind."""

    @pytest.mark.parametrize("error, kind", [
        (ResourceNotFoundError("1"), ErrorKind.NOT_FOUND),
        (ValidationError("bad", 400), ErrorKind.VALIDATION),
        (InvalidCredentialsError("no", 401), ErrorKind.VALIDATION),
        (ServerError("boom", 503), ErrorKind.SERVER),
        (NetworkError(OSError("unreachable")), ErrorKind.NETWORK),
        (UnknownError(), ErrorKind.UNKNOWN),
    ])
    def test_kind(self, error, kind):
        assert isinstance(error, ConfluenceError)
        assert error.kind is kind
