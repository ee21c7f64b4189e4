"""Formatting of values in XML request bodies and KVP parameters."""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum

__all__ = (
    "attr_escape",
    "tag_escape",
    "render_xmlns_attributes",
    "value_to_text",
    "value_to_xml_string",
)

_TAG_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})
_ATTR_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})


def tag_escape(s: str) -> str:
    """Escape text for an XML element body."""
    return s.translate(_TAG_ESCAPES)


def attr_escape(s: str) -> str:
    """Escape text for a double-quoted XML attribute."""
    return s.translate(_ATTR_ESCAPES)


def value_to_text(value) -> str:
    """Format a value as the servers expect it in a KVP parameter, without XML escaping."""
    if isinstance(value, str):
        return value
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, datetime):
        # Servers reject microseconds, e.g. 2011-01-01T00:00:00+08:00
        return value.isoformat(timespec="seconds")
    elif isinstance(value, (date, time)):
        return value.isoformat()
    elif isinstance(value, Enum):
        return str(value.value)
    else:
        return str(value)


def value_to_xml_string(value) -> str:
    """Format a value for an XML element body."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return tag_escape(value_to_text(value))


def render_xmlns_attributes(xml_namespaces: dict[str, str]) -> str:
    """Render the ``xmlns:prefix="uri"`` declarations of a {uri: prefix} mapping."""
    return " ".join(
        f'xmlns:{prefix}="{uri}"' if prefix else f'xmlns="{uri}"'
        for uri, prefix in xml_namespaces.items()
    )
