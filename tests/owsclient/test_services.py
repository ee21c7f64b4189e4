from datetime import datetime, timezone
from urllib.parse import parse_qsl

import pytest

from owsclient.exceptions import (
    ExternalValueError,
    InvalidParameterValue,
    ResponseParsingFailed,
    TransportFailed,
)
from owsclient.filters import BoundingBox, CSWRecordsFilter
from owsclient.methodmakers import ResultType
from owsclient.providers import OgcServiceProviderType
from owsclient.responses import CSWGetRecordsResponse, OwsResponse, SOSResponse
from owsclient.services import (
    BaseOwsService,
    CSWRequestParameters,
    CSWService,
    SOSRequestParameters,
    SOSService,
)
from owsclient.transport import HttpServiceCaller
from tests.requests import FakeSession
from tests.utils import HITS_XML, exception_report

CSW_URL = "http://example.com/csw"
SOS_URL = "http://example.com/sos/kvp"
OBSERVATION_XML = '<sos:GetObservationResponse xmlns:sos="http://www.opengis.net/sos/2.0"/>'


class TestSOSService:
    def test_get_observation(self, session, http_service_caller):
        session.text = OBSERVATION_XML
        service = SOSService(http_service_caller)
        response = service.get_observation(
            SOS_URL,
            feature_of_interest="station-12",
            begin_position=datetime(2020, 1, 1, tzinfo=timezone.utc),
            end_position=datetime(2020, 2, 1, tzinfo=timezone.utc),
            bbox=BoundingBox(-39, 143, -44, 148, srid=4326),
        )

        assert isinstance(response, SOSResponse)
        assert response.root.tag == "{http://www.opengis.net/sos/2.0}GetObservationResponse"
        sent = session.sent[0]
        assert sent.method == "POST"
        assert sent.url == SOS_URL
        params = dict(parse_qsl(sent.data.decode()))
        assert params["featureOfInterest"] == "station-12"
        assert params["temporalFilter"] == (
            "om:phenomenonTime,2020-01-01T00:00:00+00:00/2020-02-01T00:00:00+00:00"
        )
        assert params["BBOX"] == "-39,143,-44,148,http://www.opengis.net/def/crs/EPSG/0/4326"

    def test_get_capabilities(self, session, http_service_caller):
        session.text = '<sos:Capabilities xmlns:sos="http://www.opengis.net/sos/2.0"/>'
        SOSService(http_service_caller).get_capabilities(SOS_URL)
        assert session.sent[0].method == "GET"
        assert "request=GetCapabilities" in session.sent[0].url

    def test_unsupported_operation(self, http_service_caller):
        with pytest.raises(ExternalValueError):
            SOSService(http_service_caller).build(SOSRequestParameters(SOS_URL, "DescribeSensor"))

    def test_exception_report(self, session, http_service_caller):
        """Prove that an exception report with HTTP 400 is raised as the reported exception."""
        session.text = exception_report(
            "InvalidParameterValue", "Unknown feature", locator="featureOfInterest"
        )
        session.status_code = 400
        with pytest.raises(InvalidParameterValue) as exc_info:
            SOSService(http_service_caller).get_observation(SOS_URL, feature_of_interest="x")

        assert exc_info.value.locator == "featureOfInterest"
        assert exc_info.value.request.method == "POST"


class TestCSWService:
    def test_get_records(self, session, http_service_caller):
        response = CSWService(http_service_caller).get_records(
            CSW_URL, CSWRecordsFilter(any_text="water"), max_records=2, start_position=11
        )

        assert isinstance(response, CSWGetRecordsResponse)
        assert response.records_matched == 31
        assert len(response.records) == 2
        body = session.sent[0].data.decode()
        assert 'maxRecords="2"' in body
        assert 'startPosition="11"' in body
        assert "<ogc:Literal>*water*</ogc:Literal>" in body

    def test_get_records_count(self, session, http_service_caller):
        session.text = HITS_XML
        count = CSWService(http_service_caller).get_records_count(CSW_URL)
        assert count == 1432
        body = session.sent[0].data.decode()
        assert 'resultType="hits"' in body
        assert 'maxRecords="0"' in body

    def test_provider_setting(self, session, http_service_caller, settings):
        """Prove that the dialect of an endpoint can be configured in the settings."""
        settings.OWSCLIENT_PROVIDER_TYPES = {CSW_URL: "pycsw"}
        service = CSWService(http_service_caller)
        service.get_records(CSW_URL, CSWRecordsFilter(bbox=BoundingBox(-39, 143, -44, 148)))

        body = session.sent[0].data.decode()
        assert '<csw:Query typeNames="csw:Record">' in body
        assert '<gml:Envelope srsName="urn:ogc:def:crs:OGC:1.3:CRS84">' in body

        # Other endpoints keep the default dialect
        service.get_records("http://example.com/other/csw")
        assert '<csw:Query typeNames="gmd:MD_Metadata">' in session.sent[1].data.decode()

    def test_provider_argument(self, session, http_service_caller, settings):
        settings.OWSCLIENT_PROVIDER_TYPES = {CSW_URL: "pycsw"}
        CSWService(http_service_caller).get_records(
            CSW_URL, provider=OgcServiceProviderType.GeoServer
        )
        assert '<csw:Query typeNames="gmd:MD_Metadata">' in session.sent[0].data.decode()

    def test_unknown_provider_setting(self, http_service_caller, settings):
        settings.OWSCLIENT_PROVIDER_TYPES = {CSW_URL: "MapServer"}
        with pytest.raises(ExternalValueError):
            CSWService(http_service_caller).build(CSWRequestParameters(CSW_URL))

    def test_build_get(self, http_service_caller):
        request = CSWService(http_service_caller).build(
            CSWRequestParameters(
                CSW_URL,
                result_type=ResultType.Hits,
                provider=OgcServiceProviderType.PyCSW,
                method="get",
            )
        )
        assert request.method == "GET"
        assert request.params["resultType"] == "hits"
        assert "constraint_language_version" not in request.params

    def test_build_get_with_filter(self, http_service_caller):
        """Prove that filters are not silently dropped from GET requests."""
        with pytest.raises(ExternalValueError):
            CSWService(http_service_caller).build(
                CSWRequestParameters(CSW_URL, filter=CSWRecordsFilter(title="x"), method="GET")
            )

    @pytest.mark.parametrize(
        "parameters",
        [
            CSWRequestParameters(CSW_URL, operation="Transaction"),
            CSWRequestParameters(CSW_URL, method="PUT"),
        ],
    )
    def test_build_unsupported(self, http_service_caller, parameters):
        with pytest.raises(ExternalValueError):
            CSWService(http_service_caller).build(parameters)

    def test_get_capabilities(self, session, http_service_caller):
        session.text = '<csw:Capabilities xmlns:csw="http://www.opengis.net/cat/csw/2.0.2"/>'
        response = CSWService(http_service_caller).get_capabilities(CSW_URL)
        assert type(response) is OwsResponse
        assert session.sent[0].url == (
            f"{CSW_URL}?service=CSW&request=GetCapabilities&acceptVersions=2.0.2"
        )


class TestCall:
    """Prove how the HTTP status and body are combined into a result."""

    def test_exception_report_with_http_200(self, http_service_caller, session):
        session.text = exception_report("InvalidParameterValue", "Unknown typeName")
        with pytest.raises(InvalidParameterValue):
            CSWService(http_service_caller).get_records(CSW_URL)

    def test_http_error_without_xml(self):
        session = FakeSession(text="<html><body>Bad Gateway</body></html", status_code=502)
        with pytest.raises(TransportFailed) as exc_info:
            CSWService(HttpServiceCaller(session=session)).get_records(CSW_URL)

        assert exc_info.value.status_code == 502
        assert exc_info.value.request.url == CSW_URL

    def test_http_error_with_xml(self):
        session = FakeSession(text="<error>Internal error</error>", status_code=500)
        with pytest.raises(TransportFailed) as exc_info:
            CSWService(HttpServiceCaller(session=session)).get_records(CSW_URL)

        assert exc_info.value.status_code == 500

    def test_not_xml(self):
        session = FakeSession(text="OK")
        with pytest.raises(ResponseParsingFailed):
            CSWService(HttpServiceCaller(session=session)).get_records(CSW_URL)

    def test_build_not_implemented(self, http_service_caller):
        with pytest.raises(NotImplementedError):
            BaseOwsService(http_service_caller).build(None)
