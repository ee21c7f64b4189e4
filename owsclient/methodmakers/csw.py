"""Request construction for the Catalogue Service for the Web (CSW) 2.0.2.

GetRecords is sent as POST by default, as filters can grow too large for a query string.
The GET variant exists for catalogues that only offer a KVP binding.
"""

from __future__ import annotations

import typing
from enum import Enum

from owsclient import conf
from owsclient.dialects import (
    decorate_filter,
    includes_constraint_language_version,
    requires_east_north_order,
    type_names_for,
)
from owsclient.providers import OgcServiceProviderType
from owsclient.xml import xmlns

from .base import BaseMethodMaker, OwsRequest
from .utils import attr_escape, render_xmlns_attributes, value_to_xml_string

if typing.TYPE_CHECKING:
    from owsclient.filters import CSWRecordsFilter

__all__ = (
    "ResultType",
    "CSWMethodMakerGetDataRecords",
    "CSWMethodMakerGetCapabilities",
)

#: Namespaces declared on the request, so filter fragments can use these prefixes.
GET_RECORDS_NAMESPACES = {
    xmlns.csw.value: "csw",
    xmlns.ogc.value: "ogc",
    xmlns.gml.value: "gml",
    xmlns.gmd.value: "gmd",
    xmlns.ows.value: "ows",
    xmlns.apiso.value: "apiso",
}


class ResultType(Enum):
    """Whether the full records should be returned, or only the number of matches."""

    Results = "results"
    Hits = "hits"


class CSWMethodMakerGetDataRecords(BaseMethodMaker):
    """Construct the GetRecords requests for a catalogue."""

    service = "CSW"

    def make_post_method(
        self,
        service_url: str,
        filter: CSWRecordsFilter | str | None,
        result_type: ResultType,
        max_records: int,
        provider: OgcServiceProviderType = OgcServiceProviderType.Default,
        start_position: int = 1,
    ) -> OwsRequest:
        """Construct the GetRecords request as XML POST request.

        The ``<csw:Constraint>`` is only included when there is something to filter on.
        The filter is rewritten into the dialect of the provider. The coordinates of
        a raw filter string are not reordered, these should match what the provider reads.
        """
        if filter is None:
            filter_string = sort_string = ""
        elif isinstance(filter, str):
            filter_string, sort_string = filter, ""
        else:
            filter_string = filter.filter_string(east_north=requires_east_north_order(provider))
            sort_string = filter.sort_by_string()

        if filter_string:
            constraint = (
                f'<csw:Constraint version="{conf.OWSCLIENT_CONSTRAINT_LANGUAGE_VERSION}">'
                f"{decorate_filter(filter_string, provider)}"
                "</csw:Constraint>"
            )
        else:
            constraint = ""

        body = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f"<csw:GetRecords {render_xmlns_attributes(GET_RECORDS_NAMESPACES)}"
            ' service="CSW"'
            f' version="{conf.OWSCLIENT_CSW_VERSION}"'
            f' resultType="{result_type.value}"'
            f' maxRecords="{value_to_xml_string(max_records)}"'
            f' startPosition="{value_to_xml_string(start_position)}"'
            f' outputSchema="{attr_escape(conf.OWSCLIENT_CSW_OUTPUT_SCHEMA)}">'
            f'<csw:Query typeNames="{type_names_for(provider)}">'
            f"<csw:ElementSetName>{conf.OWSCLIENT_CSW_ELEMENT_SET_NAME}</csw:ElementSetName>"
            f"{constraint}"
            f"{sort_string}"
            "</csw:Query>"
            "</csw:GetRecords>"
        )
        return self.make_post(service_url, body)

    def make_get_method(
        self,
        service_url: str,
        result_type: ResultType,
        max_records: int,
        start_position: int,
        provider: OgcServiceProviderType = OgcServiceProviderType.Default,
    ) -> OwsRequest:
        """Construct the GetRecords request as KVP GET request.

        PyCSW refuses requests that include the ``constraint_language_version`` parameter,
        so it's only added for other providers.
        """
        params = {
            "service": "CSW",
            "request": "GetRecords",
            "version": conf.OWSCLIENT_CSW_VERSION,
            "namespace": f"xmlns(csw={xmlns.csw})",
            "outputSchema": conf.OWSCLIENT_CSW_OUTPUT_SCHEMA,
            "typeNames": type_names_for(provider),
            "elementSetName": conf.OWSCLIENT_CSW_ELEMENT_SET_NAME,
        }
        if includes_constraint_language_version(provider):
            params["constraint_language_version"] = conf.OWSCLIENT_CONSTRAINT_LANGUAGE_VERSION

        params.update(
            resultType=result_type,
            maxRecords=max_records,
            startPosition=start_position,
        )
        return self.make_get(service_url, params)


class CSWMethodMakerGetCapabilities(BaseMethodMaker):
    """Construct the GetCapabilities request for a catalogue."""

    service = "CSW"

    def make_get_method(self, service_url: str) -> OwsRequest:
        return self.make_get(
            service_url,
            {
                "service": "CSW",
                "request": "GetCapabilities",
                "acceptVersions": conf.OWSCLIENT_CSW_VERSION,
            },
        )
