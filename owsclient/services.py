"""The service classes that callers interact with.

Each service offers two steps: :meth:`~BaseOwsService.build` constructs the
request for an operation, and :meth:`~BaseOwsService.call` sends it and
classifies the response. The convenience methods combine both steps.

Any failure is raised as :class:`~owsclient.exceptions.ServiceRequestFailed`,
which carries the request for diagnostics. Exceptions that the server reported
are raised as :class:`~owsclient.exceptions.OWSException` subclasses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from owsclient import conf
from owsclient.exceptions import ExternalValueError, ResponseParsingFailed, TransportFailed
from owsclient.filters import BoundingBox, CSWRecordsFilter
from owsclient.methodmakers import (
    CSWMethodMakerGetCapabilities,
    CSWMethodMakerGetDataRecords,
    OwsRequest,
    ResultType,
    SOSMethodMaker,
)
from owsclient.providers import OgcServiceProviderType
from owsclient.responses import CSWGetRecordsResponse, OwsResponse, SOSResponse, classify
from owsclient.transport import HttpServiceCaller

logger = logging.getLogger(__name__)

__all__ = (
    "SOSRequestParameters",
    "CSWRequestParameters",
    "BaseOwsService",
    "SOSService",
    "CSWService",
)


@dataclass(frozen=True)
class SOSRequestParameters:
    """The parameters of a SOS request.
    The ``begin_position`` and ``end_position`` should be given together.
    """

    service_url: str
    operation: str = "GetObservation"
    feature_of_interest: str | None = None
    begin_position: datetime | None = None
    end_position: datetime | None = None
    bbox: BoundingBox | None = None


@dataclass(frozen=True)
class CSWRequestParameters:
    """The parameters of a CSW request."""

    service_url: str
    operation: str = "GetRecords"
    filter: CSWRecordsFilter | str | None = None
    result_type: ResultType = ResultType.Results
    max_records: int = 10
    start_position: int = 1
    #: The server dialect, when not given, this is looked up in ``OWSCLIENT_PROVIDER_TYPES``.
    provider: OgcServiceProviderType | None = None
    #: Force the HTTP method, by default GetRecords uses POST.
    method: str | None = None


class BaseOwsService:
    """Common logic to send requests to an OGC service."""

    #: The response object to return from :meth:`call`.
    response_class = OwsResponse

    def __init__(self, http_service_caller: HttpServiceCaller | None = None):
        self.http_service_caller = http_service_caller or HttpServiceCaller()

    def build(self, parameters) -> OwsRequest:
        """Construct the request for the operation in the parameters."""
        raise NotImplementedError()

    def call(self, request: OwsRequest, response_class: type[OwsResponse] | None = None):
        """Send the request, and return the response.

        :raises OWSException: When the server reported an exception.
        :raises TransportFailed: When the server couldn't be reached, or returned an HTTP error.
        :raises ResponseParsingFailed: When the server didn't return XML.
        """
        status_code, text = self.http_service_caller.send(request)

        try:
            response = classify(text, request, response_class or self.response_class)
        except ResponseParsingFailed as e:
            if status_code >= 400:
                # e.g. an HTML error page of a proxy.
                raise TransportFailed(
                    f"Service returned HTTP {status_code}", request=request, status_code=status_code
                ) from e
            raise

        if status_code >= 400:
            raise TransportFailed(
                f"Service returned HTTP {status_code}", request=request, status_code=status_code
            )
        return response


class SOSService(BaseOwsService):
    """Access to a Sensor Observation Service."""

    response_class = SOSResponse

    def __init__(
        self,
        http_service_caller: HttpServiceCaller | None = None,
        sos_method_maker: SOSMethodMaker | None = None,
    ):
        super().__init__(http_service_caller)
        self.sos_method_maker = sos_method_maker or SOSMethodMaker()

    def build(self, parameters: SOSRequestParameters) -> OwsRequest:
        """Construct the SOS request.
        GetObservation is sent as POST, GetCapabilities as GET.
        """
        if parameters.operation == "GetObservation":
            make_method = self.sos_method_maker.make_post_method
        elif parameters.operation == "GetCapabilities":
            make_method = self.sos_method_maker.make_get_method
        else:
            raise ExternalValueError(f"Unsupported SOS operation: {parameters.operation}")

        return make_method(
            parameters.service_url,
            parameters.operation,
            feature_of_interest=parameters.feature_of_interest,
            begin_position=parameters.begin_position,
            end_position=parameters.end_position,
            bbox=parameters.bbox,
        )

    def get_observation(
        self,
        sos_url: str,
        feature_of_interest: str | None = None,
        begin_position: datetime | None = None,
        end_position: datetime | None = None,
        bbox: BoundingBox | None = None,
    ) -> SOSResponse:
        """Retrieve the observations, optionally restricted to a feature, period or area."""
        request = self.build(
            SOSRequestParameters(
                sos_url,
                "GetObservation",
                feature_of_interest=feature_of_interest,
                begin_position=begin_position,
                end_position=end_position,
                bbox=bbox,
            )
        )
        return self.call(request)

    def get_capabilities(self, sos_url: str) -> SOSResponse:
        return self.call(self.build(SOSRequestParameters(sos_url, "GetCapabilities")))


class CSWService(BaseOwsService):
    """Access to a Catalogue Service for the Web."""

    def __init__(
        self,
        http_service_caller: HttpServiceCaller | None = None,
        get_records_method_maker: CSWMethodMakerGetDataRecords | None = None,
        get_capabilities_method_maker: CSWMethodMakerGetCapabilities | None = None,
    ):
        super().__init__(http_service_caller)
        self.get_records_method_maker = get_records_method_maker or CSWMethodMakerGetDataRecords()
        self.get_capabilities_method_maker = (
            get_capabilities_method_maker or CSWMethodMakerGetCapabilities()
        )

    def get_provider(self, parameters: CSWRequestParameters) -> OgcServiceProviderType:
        """Tell which dialect the catalogue speaks."""
        if parameters.provider is not None:
            return parameters.provider

        return OgcServiceProviderType.parse(
            conf.OWSCLIENT_PROVIDER_TYPES.get(parameters.service_url)
        )

    def build(self, parameters: CSWRequestParameters) -> OwsRequest:
        """Construct the CSW request.
        GetRecords is sent as POST to allow large filters, GetCapabilities as GET.
        """
        if parameters.operation == "GetCapabilities":
            return self.get_capabilities_method_maker.make_get_method(parameters.service_url)
        elif parameters.operation != "GetRecords":
            raise ExternalValueError(f"Unsupported CSW operation: {parameters.operation}")

        provider = self.get_provider(parameters)
        method = (parameters.method or "POST").upper()
        if method == "POST":
            return self.get_records_method_maker.make_post_method(
                parameters.service_url,
                parameters.filter,
                parameters.result_type,
                parameters.max_records,
                provider=provider,
                start_position=parameters.start_position,
            )
        elif method == "GET":
            if parameters.filter is not None:
                raise ExternalValueError("A GetRecords filter can only be sent as POST request.")

            return self.get_records_method_maker.make_get_method(
                parameters.service_url,
                parameters.result_type,
                parameters.max_records,
                parameters.start_position,
                provider=provider,
            )
        else:
            raise ExternalValueError(f"Unsupported HTTP method for GetRecords: {method}")

    def get_records(
        self,
        service_url: str,
        filter: CSWRecordsFilter | str | None = None,
        max_records: int = 10,
        start_position: int = 1,
        provider: OgcServiceProviderType | None = None,
    ) -> CSWGetRecordsResponse:
        """Retrieve one page of matching records."""
        request = self.build(
            CSWRequestParameters(
                service_url,
                filter=filter,
                result_type=ResultType.Results,
                max_records=max_records,
                start_position=start_position,
                provider=provider,
            )
        )
        return self.call(request, response_class=CSWGetRecordsResponse)

    def get_records_count(
        self,
        service_url: str,
        filter: CSWRecordsFilter | str | None = None,
        provider: OgcServiceProviderType | None = None,
    ) -> int:
        """Tell how many records match the filter, without retrieving them."""
        request = self.build(
            CSWRequestParameters(
                service_url,
                filter=filter,
                result_type=ResultType.Hits,
                max_records=0,
                provider=provider,
            )
        )
        response = self.call(request, response_class=CSWGetRecordsResponse)
        logger.debug("%s matched %d records", service_url, response.records_matched)
        return response.records_matched

    def get_capabilities(self, service_url: str) -> OwsResponse:
        return self.call(self.build(CSWRequestParameters(service_url, "GetCapabilities")))
