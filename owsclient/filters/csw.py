"""The ``<ogc:Filter>`` for CSW GetRecords requests.

CSW 2.0.2 uses the Filter Encoding 1.1 syntax, for example::

    <ogc:Filter>
      <ogc:And>
        <ogc:PropertyIsLike wildCard="*" singleChar="#" escapeChar="!">
          <ogc:PropertyName>AnyText</ogc:PropertyName>
          <ogc:Literal>*water*</ogc:Literal>
        </ogc:PropertyIsLike>
        <ogc:BBOX>
          <ogc:PropertyName>ows:BoundingBox</ogc:PropertyName>
          <gml:Envelope srsName="WGS:84">
            <gml:lowerCorner>143 -44</gml:lowerCorner>
            <gml:upperCorner>148 -39</gml:upperCorner>
          </gml:Envelope>
        </ogc:BBOX>
      </ogc:And>
    </ogc:Filter>

The ``ogc``, ``gml`` and ``ows`` prefixes are declared by the enclosing request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from owsclient.methodmakers.utils import attr_escape, value_to_xml_string

from .bbox import BoundingBox

#: The srsName for envelopes that don't declare a coordinate reference system.
DEFAULT_ENVELOPE_SRS_NAME = "WGS:84"

#: The wildCard, singleChar and escapeChar of the PropertyIsLike clauses.
RE_LIKE_SPECIAL_CHARS = re.compile(r"([*#!])")


class SortType(Enum):
    """How the catalogue should order the returned records."""

    ServiceDefault = None
    TitleAscending = ("apiso:Title", "ASC")
    PublicationDateDescending = ("apiso:PublicationDate", "DESC")


@dataclass(frozen=True)
class CSWRecordsFilter:
    """Restrict which records a CSW GetRecords request returns.
    All given criteria must match; unset criteria are not part of the filter.
    """

    #: Free text, matched against all text fields of a record.
    any_text: str | None = None
    title: str | None = None
    abstract: str | None = None
    #: Keywords that must all be present on the record.
    keywords: tuple[str, ...] = ()
    bbox: BoundingBox | None = None
    sort_type: SortType = SortType.ServiceDefault

    def filter_string(self, east_north: bool = False) -> str:
        """Render the ``<ogc:Filter>`` fragment, or an empty string when nothing is filtered.

        :param east_north: Write the envelope corners as longitude/latitude (x/y),
            regardless of the axis order of the bounding box CRS.
        """
        clauses = self.get_clauses(east_north=east_north)
        if not clauses:
            return ""
        elif len(clauses) == 1:
            return f"<ogc:Filter>{clauses[0]}</ogc:Filter>"
        else:
            return f"<ogc:Filter><ogc:And>{''.join(clauses)}</ogc:And></ogc:Filter>"

    def get_clauses(self, east_north: bool = False) -> list[str]:
        clauses = []
        for property_name, value in (
            ("AnyText", self.any_text),
            ("Title", self.title),
            ("Abstract", self.abstract),
        ):
            if value:
                clauses.append(render_property_is_like(property_name, f"*{escape_like(value)}*"))

        for keyword in self.keywords:
            clauses.append(render_property_is_equal_to("Subject", keyword))

        if self.bbox is not None:
            clauses.append(render_bbox(self.bbox, east_north=east_north))

        return clauses

    def sort_by_string(self) -> str:
        """Render the ``<ogc:SortBy>`` fragment, or an empty string for the server ordering."""
        if self.sort_type.value is None:
            return ""

        property_name, order = self.sort_type.value
        return (
            "<ogc:SortBy><ogc:SortProperty>"
            f"<ogc:PropertyName>{property_name}</ogc:PropertyName>"
            f"<ogc:SortOrder>{order}</ogc:SortOrder>"
            "</ogc:SortProperty></ogc:SortBy>"
        )


def escape_like(value: str) -> str:
    """Match the wildcard characters literally."""
    return RE_LIKE_SPECIAL_CHARS.sub(r"!\1", value)


def render_property_is_like(property_name: str, pattern: str) -> str:
    return (
        '<ogc:PropertyIsLike wildCard="*" singleChar="#" escapeChar="!">'
        f"<ogc:PropertyName>{property_name}</ogc:PropertyName>"
        f"<ogc:Literal>{value_to_xml_string(pattern)}</ogc:Literal>"
        "</ogc:PropertyIsLike>"
    )


def render_property_is_equal_to(property_name: str, value) -> str:
    return (
        "<ogc:PropertyIsEqualTo>"
        f"<ogc:PropertyName>{property_name}</ogc:PropertyName>"
        f"<ogc:Literal>{value_to_xml_string(value)}</ogc:Literal>"
        "</ogc:PropertyIsEqualTo>"
    )


def render_bbox(bbox: BoundingBox, east_north: bool = False) -> str:
    """Render the spatial clause for the ``ows:BoundingBox`` queryable.

    The corners follow the axis ordering of the coordinate reference system.
    Without one, the longitude/latitude ordering is used, which every catalogue accepts.
    The ``east_north`` flag forces that ordering for servers that read every envelope as CRS84.
    """
    crs = bbox.crs
    if not east_north and crs is not None and crs.is_north_east_order:
        lower, upper = (bbox.south, bbox.west), (bbox.north, bbox.east)
    else:
        lower, upper = (bbox.west, bbox.south), (bbox.east, bbox.north)

    srs_name = crs.urn if crs is not None else DEFAULT_ENVELOPE_SRS_NAME
    return (
        "<ogc:BBOX>"
        "<ogc:PropertyName>ows:BoundingBox</ogc:PropertyName>"
        f'<gml:Envelope srsName="{attr_escape(srs_name)}">'
        f"<gml:lowerCorner>{lower[0]} {lower[1]}</gml:lowerCorner>"
        f"<gml:upperCorner>{upper[0]} {upper[1]}</gml:upperCorner>"
        "</gml:Envelope>"
        "</ogc:BBOX>"
    )
