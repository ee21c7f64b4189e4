"""Provider specific rewrites of OGC requests.

Not every server accepts the nominal OGC schema. These functions
translate the filter fragments and request parameters into the dialect
each server software accepts. The rewrites are textual, to keep the
exact output that these servers are known to accept.

All rewrites are idempotent: decorating a decorated filter changes nothing.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from owsclient.crs import CRS84
from owsclient.providers import OgcServiceProviderType

logger = logging.getLogger(__name__)

__all__ = (
    "decorate_filter",
    "includes_constraint_language_version",
    "requires_east_north_order",
    "type_names_for",
)

#: The ``ows:BoundingBox`` queryable as property name in a spatial filter, e.g.
#: ``<ogc:PropertyName>ows:BoundingBox</ogc:PropertyName>``.
RE_BOUNDING_BOX_PROPERTY = re.compile(
    r"(?P<start><(?:[\w.-]+:)?PropertyName\b[^>]*>\s*)"
    r"ows:BoundingBox"
    r"(?P<end>\s*</(?:[\w.-]+:)?PropertyName\s*>)"
)

#: The srsName attribute of an envelope, e.g. ``<gml:Envelope srsName="WGS:84">``.
RE_ENVELOPE_SRS_NAME = re.compile(
    r"(?P<start><(?:[\w.-]+:)?Envelope\b[^>]*?\ssrsName\s*=\s*)"
    r"(?P<quote>[\"'])[^\"']*(?P=quote)"
)

#: The typeNames to query for, by provider.
TYPE_NAMES = {
    OgcServiceProviderType.Default: "gmd:MD_Metadata",
    OgcServiceProviderType.PyCSW: "csw:Record",
    OgcServiceProviderType.GeoServer: "gmd:MD_Metadata",
}

#: Whether a GET request may include the ``constraint_language_version`` parameter.
CONSTRAINT_LANGUAGE_VERSION = {
    OgcServiceProviderType.Default: True,
    OgcServiceProviderType.PyCSW: False,
    OgcServiceProviderType.GeoServer: True,
}

#: Whether envelope corners must be written as longitude/latitude.
#: PyCSW reads every envelope as CRS84, see _decorate_pycsw().
EAST_NORTH_ORDER = {
    OgcServiceProviderType.Default: False,
    OgcServiceProviderType.PyCSW: True,
    OgcServiceProviderType.GeoServer: False,
}


def _identity(fragment: str) -> str:
    return fragment


def _decorate_geoserver(fragment: str) -> str:
    """GeoServer only recognizes the unprefixed ``BoundingBox`` queryable."""
    return RE_BOUNDING_BOX_PROPERTY.sub(r"\g<start>BoundingBox\g<end>", fragment)


def _decorate_pycsw(fragment: str) -> str:
    """PyCSW only accepts envelopes in the CRS84 notation."""
    return RE_ENVELOPE_SRS_NAME.sub(
        lambda match: f"{match['start']}{match['quote']}{CRS84.urn}{match['quote']}",
        fragment,
    )


DECORATORS: dict[OgcServiceProviderType, Callable[[str], str]] = {
    OgcServiceProviderType.Default: _identity,
    OgcServiceProviderType.PyCSW: _decorate_pycsw,
    OgcServiceProviderType.GeoServer: _decorate_geoserver,
}


def decorate_filter(fragment: str, provider: OgcServiceProviderType) -> str:
    """Rewrite the filter fragment into the dialect of the provider.

    Patterns that don't occur are left as-is, this is not validated against any schema.
    """
    decorated = DECORATORS[provider](fragment)
    if decorated != fragment:
        logger.debug("Rewrote filter for %s dialect: %s", provider, decorated)
    return decorated


def type_names_for(provider: OgcServiceProviderType) -> str:
    """Tell which record type to query at the provider."""
    return TYPE_NAMES[provider]


def includes_constraint_language_version(provider: OgcServiceProviderType) -> bool:
    """Tell whether GET requests should send the ``constraint_language_version`` parameter."""
    return CONSTRAINT_LANGUAGE_VERSION[provider]


def requires_east_north_order(provider: OgcServiceProviderType) -> bool:
    """Tell whether envelope corners should be written as longitude/latitude (x/y)."""
    return EAST_NORTH_ORDER[provider]
