"""Coordinate reference systems, as referenced in spatial constraints.

Each service expects its own notation: CSW envelopes use the OGC URN
(``urn:ogc:def:crs:EPSG::4326``) while the 52North SOS ``BBOX`` parameter
uses the URL notation (``http://www.opengis.net/def/crs/EPSG/0/4326``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import cached_property, lru_cache

import pyproj

from owsclient.exceptions import ExternalValueError

logger = logging.getLogger(__name__)

__all__ = [
    "CRS",
    "CRS84",
]

RE_CRS_URN = re.compile(
    r"^urn:(?:ogc|opengis):def:crs"
    r":(?P<authority>EPSG|OGC)"
    r":(?P<version>[0-9]+(?:\.[0-9]+){0,2})?"
    r":(?P<code>[0-9]+|CRS84)$",
    re.IGNORECASE,
)

RE_CRS_URL = re.compile(
    r"^https?://www\.opengis\.net/def/crs"
    r"/(?P<authority>EPSG|OGC)"
    r"/(?P<version>[0-9]+(?:\.[0-9]+){0,2})"
    r"/(?P<code>[0-9]+|CRS84)$",
    re.IGNORECASE,
)


@lru_cache(maxsize=10)
def _get_proj_crs(authority: str, code: str) -> pyproj.CRS:
    logger.debug("Constructing PROJ CRS for %s:%s", authority, code)
    return pyproj.CRS.from_authority(authority, code)


@dataclass(frozen=True)
class CRS:
    """A coordinate reference system from the EPSG registry, or the OGC CRS84 definition."""

    #: Either "EPSG" or "OGC".
    authority: str

    #: The code within the authority, e.g. "4326" or "CRS84".
    code: str

    #: The numeric spatial reference ID. CRS84 shares 4326 with WGS84.
    srid: int

    #: The version of the registry, only used by the OGC definitions.
    version: str = ""

    @classmethod
    def from_srid(cls, srid: int) -> CRS:
        """Construct the EPSG reference system for a numeric spatial reference ID."""
        return cls(authority="EPSG", code=str(srid), srid=int(srid))

    @classmethod
    def from_string(cls, value: str | int) -> CRS:
        """Parse the notations that OGC services use for a reference system:

        * A numeric SRID.
        * The short form :samp:`EPSG:{srid}`.
        * An OGC URN, such as :samp:`urn:ogc:def:crs:EPSG::{srid}`.
        * An OGC URL, such as :samp:`http://www.opengis.net/def/crs/EPSG/0/{srid}`.
        """
        if isinstance(value, int) or value.isdigit():
            return cls.from_srid(int(value))
        elif value.upper().startswith("EPSG:") and value[5:].isdigit():
            return cls.from_srid(int(value[5:]))

        match = RE_CRS_URN.match(value) or RE_CRS_URL.match(value)
        if match is None:
            raise ExternalValueError(f"Unknown CRS notation [{value}] specified")

        authority = match["authority"].upper()
        code = match["code"].upper()
        if authority == "EPSG":
            if not code.isdigit():
                raise ExternalValueError(f"CRS [{value}] should contain a numeric SRID value.")
            return cls.from_srid(int(code))
        elif code != "CRS84":
            raise ExternalValueError(f"OGC CRS [{value}] contains unknown id [{code}]")
        else:
            return cls(authority="OGC", code=code, srid=4326, version=match["version"] or "1.3")

    @property
    def urn(self) -> str:
        """The OGC URN notation, as used in the ``srsName`` of CSW envelopes."""
        return f"urn:ogc:def:crs:{self.authority}:{self.version}:{self.code}"

    @property
    def uri(self) -> str:
        """The OGC URL notation, as used in the SOS ``BBOX`` parameter."""
        version = "0" if self.authority == "EPSG" else self.version
        return f"http://www.opengis.net/def/crs/{self.authority}/{version}/{self.code}"

    @cached_property
    def axis_direction(self) -> list[str]:
        """Tell what the axis ordering of this coordinate system is.

        For example, WGS84 will return ``['north', 'east']``,
        while CRS84 returns ``['east', 'north']``.
        See: https://wiki.osgeo.org/wiki/Axis_Order_Confusion for a good summary.
        """
        proj_crs = _get_proj_crs(self.authority, self.code)
        return [axis.direction for axis in proj_crs.axis_info]

    @property
    def is_north_east_order(self) -> bool:
        """Tell whether coordinates are written as latitude/longitude (y/x)."""
        return self.axis_direction[:2] == ["north", "east"]

    def __str__(self):
        return self.urn


#: Like EPSG:4326 but with longitude/latitude (x/y). This is the notation PyCSW expects.
CRS84 = CRS.from_string("urn:ogc:def:crs:OGC:1.3:CRS84")
