from __future__ import annotations

from lxml import etree

from owsclient.xml import xmlns

# Namespaces for tag retrieval
NAMESPACES = {
    "csw": xmlns.csw.value,
    "gmd": xmlns.gmd.value,
    "gml": xmlns.gml.value,
    "ogc": xmlns.ogc.value,
    "ows": xmlns.ows.value,
}

SEARCH_RESULTS_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<csw:GetRecordsResponse xmlns:csw="{xmlns.csw}" xmlns:gmd="{xmlns.gmd}" version="2.0.2">
  <csw:SearchStatus timestamp="2024-03-01T10:00:00Z"/>
  <csw:SearchResults numberOfRecordsMatched="31" numberOfRecordsReturned="2"
                     nextRecord="3" elementSet="full">
    <gmd:MD_Metadata><gmd:fileIdentifier/></gmd:MD_Metadata>
    <gmd:MD_Metadata><gmd:fileIdentifier/></gmd:MD_Metadata>
  </csw:SearchResults>
</csw:GetRecordsResponse>
"""

HITS_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<csw:GetRecordsResponse xmlns:csw="{xmlns.csw}" version="2.0.2">
  <csw:SearchStatus timestamp="2024-03-01T10:00:00Z"/>
  <csw:SearchResults numberOfRecordsMatched="1432" numberOfRecordsReturned="0"
                     nextRecord="1" elementSet="full"/>
</csw:GetRecordsResponse>
"""

BBOX_FILTER = (
    '<ogc:Filter xmlns:ogc="http://www.opengis.net/ogc" ><ogc:BBOX>'
    " \t<ogc:PropertyName>ows:BoundingBox</ogc:PropertyName>"
    ' \t\t<gml:Envelope srsName="WGS:84">'
    " \t\t\t<gml:lowerCorner>143 -44</gml:lowerCorner>"
    " \t\t\t<gml:upperCorner>148 -39</gml:upperCorner>"
    " \t\t</gml:Envelope>"
    " \t</ogc:BBOX></ogc:Filter>"
)


def exception_report(code, text, locator=None, namespace=xmlns.ows11) -> str:
    """Construct an ``<ows:ExceptionReport>`` like servers return it."""
    locator_attr = f' locator="{locator}"' if locator else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<ows:ExceptionReport xmlns:ows="{namespace}" version="2.0.0" xml:lang="en-US">\n'
        f'  <ows:Exception exceptionCode="{code}"{locator_attr}>\n'
        f"    <ows:ExceptionText>{text}</ows:ExceptionText>\n"
        "  </ows:Exception>\n"
        "</ows:ExceptionReport>\n"
    )


def parse_xml(xml_text: str) -> etree._Element:
    """Prove that the XML is well-formed, and return the parsed tree."""
    return etree.fromstring(xml_text.encode())
