"""Bounding box handling for spatial constraints."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from owsclient.crs import CRS


@dataclass(frozen=True)
class BoundingBox:
    """A rectangular area, given by its outer bounds.

    The caller is responsible for providing the bounds in the right order
    (``north >= south``), these are not validated.
    """

    north: float
    west: float
    south: float
    east: float

    #: The EPSG code of the coordinate reference system the bounds are expressed in.
    srid: int | None = None

    @cached_property
    def crs(self) -> CRS | None:
        """The coordinate reference system, if the bounds declared one."""
        return CRS.from_srid(self.srid) if self.srid is not None else None


def encode_bbox(bbox: BoundingBox) -> str:
    """Render the bounding box in the 52North SOS ``BBOX`` notation.

    This produces ``maxlat,minlon,minlat,maxlon[,srsURI]``, hence
    the north/west corner comes before the south/east corner.
    The ``srsURI`` has the form :samp:`http://www.opengis.net/def/crs/EPSG/0/{srid}`,
    and is left out when the bounding box has no coordinate reference system.
    """
    parts = [str(bbox.north), str(bbox.west), str(bbox.south), str(bbox.east)]
    if bbox.crs is not None:
        parts.append(bbox.crs.uri)
    return ",".join(parts)
