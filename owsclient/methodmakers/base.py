"""The request object that all method makers produce."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.http import QueryDict

from .utils import value_to_text

logger = logging.getLogger(__name__)

__all__ = (
    "OwsRequest",
    "BaseMethodMaker",
    "urlencode",
)

#: Characters that don't need escaping in the query string.
#: This keeps values like ``typeNames=gmd:MD_Metadata`` and the ``BBOX`` lists readable.
QUERY_SAFE_CHARS = ":/,"

CONTENT_TYPE_XML = "application/xml; charset=utf-8"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded; charset=utf-8"


def urlencode(params: dict) -> str:
    """Encode the parameters as query string, in their given ordering."""
    query = QueryDict(mutable=True)
    for name, value in params.items():
        query[name] = value_to_text(value)
    return query.urlencode(safe=QUERY_SAFE_CHARS)


@dataclass(frozen=True)
class OwsRequest:
    """A fully formed HTTP request, ready to be sent by the transport.

    GET requests carry their parameters in :attr:`params`,
    POST requests carry a ready-made :attr:`body`.
    """

    method: str
    url: str
    params: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    content_type: str | None = None

    @property
    def query_string(self) -> str:
        return urlencode(self.params)

    @property
    def full_url(self) -> str:
        """The URL including the query parameters."""
        if not self.params:
            return self.url

        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{self.query_string}"

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": self.content_type} if self.content_type else {}

    def __str__(self):
        return f"{self.method} {self.full_url}"


class BaseMethodMaker:
    """Base class for the objects that construct the requests for a service."""

    #: The OGC service type, e.g. "CSW"
    service = None

    def make_get(self, service_url: str, params: dict) -> OwsRequest:
        request = OwsRequest(
            method="GET",
            url=service_url,
            params={name: value_to_text(value) for name, value in params.items()},
        )
        logger.debug("Constructed %s request: %s", self.service, request)
        return request

    def make_post(self, service_url: str, body: str, content_type=CONTENT_TYPE_XML) -> OwsRequest:
        request = OwsRequest(
            method="POST",
            url=service_url,
            body=body,
            content_type=content_type,
        )
        logger.debug("Constructed %s request: POST %s\n%s", self.service, service_url, body)
        return request
