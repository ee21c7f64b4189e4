"""The server implementations which need their own dialect of the OGC protocols."""

from __future__ import annotations

from enum import Enum

from owsclient.exceptions import ExternalValueError


class OgcServiceProviderType(Enum):
    """The server software behind an OGC service endpoint.

    Most servers follow the OGC schema closely enough (``Default``),
    others need small rewrites of the request before they accept it.
    """

    Default = "Default"
    PyCSW = "PyCSW"
    GeoServer = "GeoServer"

    @classmethod
    def parse(cls, value: str | OgcServiceProviderType | None) -> OgcServiceProviderType:
        """Translate a configured name (e.g. ``"pycsw"``) into the enum value."""
        if value is None:
            return cls.Default
        if isinstance(value, cls):
            return value

        for member in cls:
            if member.value.lower() == value.lower():
                return member

        allowed = ", ".join(member.value for member in cls)
        raise ExternalValueError(f"Unknown OGC service provider '{value}', choices are: {allowed}")

    def __str__(self):
        return self.value
