"""Response classification.

Servers report a rejected request in an ``<ows:ExceptionReport>``, often with an
HTTP 200 status. Every response body is therefore inspected before it's
handed to the caller as an :class:`OwsResponse`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from xml.etree.ElementTree import Element

from owsclient.exceptions import ExternalParsingError, OWSException, ResponseParsingFailed
from owsclient.methodmakers.base import OwsRequest
from owsclient.xml import parse_xml_from_string, split_ns, xmlns

logger = logging.getLogger(__name__)

__all__ = (
    "OwsResponse",
    "SOSResponse",
    "CSWGetRecordsResponse",
    "check_for_exception_response",
    "classify",
)

#: The namespaces in which an <ExceptionReport> root element is recognized.
EXCEPTION_REPORT_NAMESPACES = (xmlns.ows10.value, xmlns.ows11.value, xmlns.ows20.value)

#: The older OGC (WMS 1.1, WFS 1.0) notation.
SERVICE_EXCEPTION_REPORT = xmlns.ogc.qname("ServiceExceptionReport")


@dataclass(frozen=True)
class OwsResponse:
    """A successful response, together with the request that produced it."""

    text: str
    request: OwsRequest

    @cached_property
    def root(self) -> Element:
        """The parsed XML document."""
        try:
            return parse_xml_from_string(self.text)
        except ExternalParsingError as e:
            raise ResponseParsingFailed(f"Unable to parse XML: {e}", request=self.request) from e


class SOSResponse(OwsResponse):
    """The response of a SOS GetObservation or GetCapabilities request."""


class CSWGetRecordsResponse(OwsResponse):
    """The response of a CSW GetRecords request.

    This exposes the paging information from the ``<csw:SearchResults>`` element,
    which is all a ``resultType=hits`` request returns.
    """

    @cached_property
    def search_results(self) -> Element:
        search_results = self.root.find(xmlns.csw.qname("SearchResults"))
        if search_results is None:
            raise ResponseParsingFailed(
                "Response has no <csw:SearchResults> element.", request=self.request
            )
        return search_results

    @property
    def records_matched(self) -> int:
        return self._get_int_attribute("numberOfRecordsMatched")

    @property
    def records_returned(self) -> int:
        return self._get_int_attribute("numberOfRecordsReturned")

    @property
    def next_record(self) -> int:
        """The startPosition for the next page, 0 when all records are retrieved."""
        return self._get_int_attribute("nextRecord", default=0)

    @property
    def records(self) -> list[Element]:
        """The returned records, e.g. the ``<gmd:MD_Metadata>`` elements."""
        return list(self.search_results)

    def _get_int_attribute(self, name, default=None) -> int:
        value = self.search_results.attrib.get(name)
        if value is None:
            if default is None:
                raise ResponseParsingFailed(
                    f"<csw:SearchResults> misses required attribute '{name}'",
                    request=self.request,
                )
            return default

        try:
            return int(value)
        except ValueError:
            raise ResponseParsingFailed(
                f"<csw:SearchResults> has an invalid '{name}' value: {value!r}",
                request=self.request,
            ) from None


def _is_exception_report(root: Element) -> bool:
    namespace, local_name = split_ns(root.tag)
    return (
        local_name == "ExceptionReport" and namespace in EXCEPTION_REPORT_NAMESPACES
    ) or root.tag in (SERVICE_EXCEPTION_REPORT, "ServiceExceptionReport")


def check_for_exception_response(text: str | bytes):
    """Raise the matching :class:`OWSException` when the body is an exception report.

    This parses documents such as::

        <ows:ExceptionReport xmlns:ows="http://www.opengis.net/ows/1.1" version="2.0.0">
          <ows:Exception exceptionCode="InvalidParameterValue" locator="typeNames">
            <ows:ExceptionText>Unknown typeName</ows:ExceptionText>
          </ows:Exception>
        </ows:ExceptionReport>

    :raises ExternalParsingError: When the body isn't well-formed XML.
    """
    root = parse_xml_from_string(text)
    if not _is_exception_report(root):
        return

    namespace = split_ns(root.tag)[0]
    if namespace in EXCEPTION_REPORT_NAMESPACES:
        exception = root.find(f"{{{namespace}}}Exception")
        if exception is None:
            code, locator, message = None, None, None
        else:
            code = exception.attrib.get("exceptionCode")
            locator = exception.attrib.get("locator")
            message = "\n".join(
                (text_element.text or "").strip()
                for text_element in exception.findall(f"{{{namespace}}}ExceptionText")
            )
    else:
        # <ServiceExceptionReport><ServiceException code="...">text</ServiceException>
        exception = next(iter(root), None)
        if exception is None:
            code, locator, message = None, None, None
        else:
            code = exception.attrib.get("code")
            locator = exception.attrib.get("locator")
            message = (exception.text or "").strip()

    raise OWSException.from_report(code=code, text=message or None, locator=locator)


def classify(
    text: str, request: OwsRequest, response_class: type[OwsResponse] = OwsResponse
) -> OwsResponse:
    """Turn the response body into a typed response, or raise the reported exception.

    :raises OWSException: When the server returned an exception report.
    :raises ResponseParsingFailed: When the body isn't well-formed XML.
    """
    try:
        check_for_exception_response(text)
    except OWSException as e:
        logger.debug("%s returned exception %s: %s", request, e.code, e.text)
        e.request = request
        raise
    except ExternalParsingError as e:
        raise ResponseParsingFailed(f"Unable to parse XML: {e}", request=request) from e

    return response_class(text=text, request=request)
