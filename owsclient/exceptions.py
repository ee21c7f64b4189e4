"""Exceptions raised while talking to OGC Web Services.

All errors that reach the caller derive from :class:`ServiceRequestFailed`,
and carry the request that caused them. When the server replied with an
``<ows:ExceptionReport>``, an :class:`OWSException` (or one of its subclasses)
is raised instead, so callers can tell a rejected request apart from a network failure.

See:
https://portal.ogc.org/files/?artifact_id=20040 (OWS Common 1.1, table 25)
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    from owsclient.methodmakers.base import OwsRequest


class ExternalValueError(ValueError):
    """Raise a ValueError for values provided by the caller.
    This helps to distinguish between internal bugs
    (e.g. unpacking values) and malformed input.
    """


class ExternalParsingError(ValueError):
    """Raise a ValueError for a parsing problem of remote content."""


class ServiceRequestFailed(Exception):
    """Base class for every failure of a service call.
    The :attr:`request` is kept for diagnostic logging.
    """

    text_template = "The request to the service failed."

    def __init__(self, text=None, request: OwsRequest | None = None):
        text = text or self.text_template
        super().__init__(text)
        self.text = text
        self.request = request

    def __str__(self):
        if self.request is None:
            return self.text
        return f"{self.text} (request: {self.request.method} {self.request.url})"


class TransportFailed(ServiceRequestFailed):
    """The HTTP request could not be completed, or returned an error status."""

    text_template = "Unable to reach the service."

    def __init__(self, text=None, request: OwsRequest | None = None, status_code=None):
        super().__init__(text, request=request)
        self.status_code = status_code


class ResponseParsingFailed(ServiceRequestFailed):
    """The service returned content that could not be parsed."""

    text_template = "The response could not be parsed."


class OWSException(ServiceRequestFailed):
    """Base class for exceptions reported by the service in an ``<ows:ExceptionReport>``."""

    code = None
    text_template = "The service reported an exception ({code})."

    def __init__(self, text=None, code=None, locator=None, request: OwsRequest | None = None):
        self.code = code or self.code or self.__class__.__name__
        super().__init__(text or self.text_template.format(code=self.code), request=request)
        self.locator = locator

    @classmethod
    def from_report(
        cls, code: str | None, text: str | None, locator: str | None = None
    ) -> OWSException:
        """Construct the exception class that matches the reported ``exceptionCode``."""
        exception_class = _EXCEPTIONS_BY_CODE.get(code, OWSException)
        return exception_class(text=text, code=code, locator=locator)


class OperationNotSupported(OWSException):
    """The requested operation is not implemented by the server."""

    code = "OperationNotSupported"
    text_template = "Operation is not implemented by the server."


class MissingParameterValue(OWSException):
    """A required parameter was not sent."""

    code = "MissingParameterValue"
    text_template = "The request misses a required parameter."


class InvalidParameterValue(OWSException):
    """A parameter had an unsupported value, e.g. an unknown typeName."""

    code = "InvalidParameterValue"
    text_template = "The request contains an invalid parameter value."


class VersionNegotiationFailed(OWSException):
    code = "VersionNegotiationFailed"
    text_template = "The server doesn't support the requested protocol version."


class InvalidUpdateSequence(OWSException):
    code = "InvalidUpdateSequence"
    text_template = "The updateSequence value is greater than the server value."


class OptionNotSupported(OWSException):
    code = "OptionNotSupported"
    text_template = "The requested option is not implemented by the server."


class NoApplicableCode(OWSException):
    """Generic server error, no other exception code applies."""

    code = "NoApplicableCode"
    text_template = "The server failed to process the request."


class OperationParsingFailed(OWSException):
    code = "OperationParsingFailed"
    text_template = "The request could not be parsed by the server."


class OperationProcessingFailed(OWSException):
    code = "OperationProcessingFailed"
    text_template = "The request could not be processed by the server."


_EXCEPTIONS_BY_CODE = {
    exception_class.code: exception_class
    for exception_class in (
        OperationNotSupported,
        MissingParameterValue,
        InvalidParameterValue,
        VersionNegotiationFailed,
        InvalidUpdateSequence,
        OptionNotSupported,
        NoApplicableCode,
        OperationParsingFailed,
        OperationProcessingFailed,
    )
}
