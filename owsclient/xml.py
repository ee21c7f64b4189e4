"""XML parsing for all responses that are received from the services.

Remote servers are not trusted, so the documents are parsed with defusedxml.
Payloads with entity expansion or external DTD's are rejected.
"""

from __future__ import annotations

import logging
from enum import Enum
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import DefusedXMLParser, ParseError

from owsclient.exceptions import ExternalParsingError

logger = logging.getLogger(__name__)

__all__ = (
    "xmlns",
    "parse_xml_from_string",
    "split_ns",
)


class xmlns(Enum):
    """The namespaces that requests and responses of CSW and SOS services use.
    The prefixes in a response are arbitrary, tags are matched on their full qualified
    name (e.g. ``{http://www.opengis.net/ows/1.1}ExceptionReport``).
    """

    ogc = "http://www.opengis.net/ogc"  # Filter Encoding 1.1 and ServiceExceptionReport
    ows10 = "http://www.opengis.net/ows"
    ows11 = "http://www.opengis.net/ows/1.1"
    ows20 = "http://www.opengis.net/ows/2.0"
    csw202 = "http://www.opengis.net/cat/csw/2.0.2"
    apiso = "http://www.opengis.net/cat/csw/apiso/1.0"  # ISO application profile queryables
    sos20 = "http://www.opengis.net/sos/2.0"
    gml311 = "http://www.opengis.net/gml"
    gmd = "http://www.isotc211.org/2005/gmd"

    # The versions CSW 2.0.2 requests are written in
    ows = ows10
    csw = csw202
    sos = sos20
    gml = gml311

    def __str__(self):
        return self.value

    def qname(self, local_name) -> str:
        """Convert the tag name into a fully qualified name."""
        return f"{{{self.value}}}{local_name}"


def parse_xml_from_string(xml_string: str | bytes) -> Element:
    """Parse the response body.

    :raises ExternalParsingError: When the body isn't well-formed, or contains DTD's.
    """
    parser = DefusedXMLParser(forbid_dtd=True, forbid_entities=True, forbid_external=True)

    # The stdlib parser refuses unicode strings with an encoding declaration.
    if isinstance(xml_string, str):
        xml_string = xml_string.lstrip()
        if xml_string.startswith("<?"):
            xml_string = xml_string[xml_string.find("?>") + 2 :]

    try:
        parser.feed(xml_string)
        return parser.close()
    except (ParseError, DefusedXmlException) as e:
        logger.debug("Parsing XML error: %s: %s", e, xml_string[:1000])
        raise ExternalParsingError(str(e)) from e


def split_ns(xml_name: str) -> tuple[str | None, str]:
    """Split the element tag into the namespace and local name."""
    if xml_name.startswith("{"):
        end = xml_name.index("}")
        return xml_name[1:end], xml_name[end + 1 :]
    else:
        return None, xml_name
