import pytest

from owsclient.dialects import (
    decorate_filter,
    includes_constraint_language_version,
    requires_east_north_order,
    type_names_for,
)
from owsclient.exceptions import ExternalValueError
from owsclient.providers import OgcServiceProviderType
from tests.utils import BBOX_FILTER


class TestDecorateFilter:
    def test_default(self):
        """Prove that the default dialect leaves the filter untouched."""
        assert decorate_filter(BBOX_FILTER, OgcServiceProviderType.Default) == BBOX_FILTER

    def test_pycsw(self):
        """Prove that PyCSW receives the envelope in CRS84 notation."""
        decorated = decorate_filter(BBOX_FILTER, OgcServiceProviderType.PyCSW)
        assert '<gml:Envelope srsName="urn:ogc:def:crs:OGC:1.3:CRS84">' in decorated
        assert "WGS:84" not in decorated

        # Nothing else is changed
        assert decorated == BBOX_FILTER.replace("WGS:84", "urn:ogc:def:crs:OGC:1.3:CRS84")

    def test_pycsw_single_quotes(self):
        decorated = decorate_filter(
            "<gml:Envelope srsName='EPSG:4326'></gml:Envelope>", OgcServiceProviderType.PyCSW
        )
        assert decorated == "<gml:Envelope srsName='urn:ogc:def:crs:OGC:1.3:CRS84'></gml:Envelope>"

    def test_geoserver(self):
        """Prove that GeoServer receives the unprefixed BoundingBox queryable."""
        decorated = decorate_filter(BBOX_FILTER, OgcServiceProviderType.GeoServer)
        assert "<ogc:PropertyName>BoundingBox</ogc:PropertyName>" in decorated
        assert "ows:BoundingBox" not in decorated
        assert '<gml:Envelope srsName="WGS:84">' in decorated

    def test_geoserver_other_properties(self):
        """Prove that other property names are not rewritten."""
        fragment = "<ogc:PropertyName>apiso:Title</ogc:PropertyName>"
        assert decorate_filter(fragment, OgcServiceProviderType.GeoServer) == fragment

    @pytest.mark.parametrize("provider", list(OgcServiceProviderType))
    def test_idempotent(self, provider):
        """Prove that decorating twice gives the same result as decorating once."""
        once = decorate_filter(BBOX_FILTER, provider)
        assert decorate_filter(once, provider) == once

    @pytest.mark.parametrize("provider", list(OgcServiceProviderType))
    def test_no_bbox(self, provider):
        """Prove that filters without the patterns are passed as-is."""
        fragment = (
            "<ogc:Filter><ogc:PropertyIsEqualTo>"
            "<ogc:PropertyName>Subject</ogc:PropertyName><ogc:Literal>water</ogc:Literal>"
            "</ogc:PropertyIsEqualTo></ogc:Filter>"
        )
        assert decorate_filter(fragment, provider) == fragment


@pytest.mark.parametrize(
    "provider,expect",
    [
        (OgcServiceProviderType.Default, "gmd:MD_Metadata"),
        (OgcServiceProviderType.PyCSW, "csw:Record"),
        (OgcServiceProviderType.GeoServer, "gmd:MD_Metadata"),
    ],
)
def test_type_names(provider, expect):
    assert type_names_for(provider) == expect


@pytest.mark.parametrize(
    "provider,expect",
    [
        (OgcServiceProviderType.Default, True),
        (OgcServiceProviderType.PyCSW, False),
        (OgcServiceProviderType.GeoServer, True),
    ],
)
def test_constraint_language_version(provider, expect):
    assert includes_constraint_language_version(provider) is expect


@pytest.mark.parametrize(
    "provider,expect",
    [
        (OgcServiceProviderType.Default, False),
        (OgcServiceProviderType.PyCSW, True),
        (OgcServiceProviderType.GeoServer, False),
    ],
)
def test_east_north_order(provider, expect):
    assert requires_east_north_order(provider) is expect


class TestProviderType:
    @pytest.mark.parametrize(
        "value,expect",
        [
            (None, OgcServiceProviderType.Default),
            ("pycsw", OgcServiceProviderType.PyCSW),
            ("GeoServer", OgcServiceProviderType.GeoServer),
            ("DEFAULT", OgcServiceProviderType.Default),
            (OgcServiceProviderType.PyCSW, OgcServiceProviderType.PyCSW),
        ],
    )
    def test_parse(self, value, expect):
        assert OgcServiceProviderType.parse(value) is expect

    def test_parse_unknown(self):
        with pytest.raises(ExternalValueError) as exc_info:
            OgcServiceProviderType.parse("MapServer")
        assert "Default, PyCSW, GeoServer" in str(exc_info.value)
