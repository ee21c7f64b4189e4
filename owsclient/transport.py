"""Sending the constructed requests over HTTP."""

from __future__ import annotations

import logging

import requests

from owsclient import conf
from owsclient.exceptions import TransportFailed
from owsclient.methodmakers.base import OwsRequest

logger = logging.getLogger(__name__)

__all__ = ("HttpServiceCaller",)


class HttpServiceCaller:
    """Perform the HTTP requests, using a :class:`requests.Session` for connection pooling.

    The status code is returned together with the body, since OGC servers
    often report their exceptions with an HTTP 400/500 status.
    """

    def __init__(self, session: requests.Session | None = None, timeout=None):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def send(self, request: OwsRequest) -> tuple[int, str]:
        """Send the request, and return the status code and decoded body.

        :raises TransportFailed: When the server couldn't be reached.
        """
        headers = {"User-Agent": conf.OWSCLIENT_USER_AGENT, **request.headers}
        timeout = self.timeout if self.timeout is not None else conf.OWSCLIENT_REQUEST_TIMEOUT
        logger.debug("Sending %s", request)

        try:
            response = self.session.request(
                request.method,
                request.full_url,
                data=request.body.encode("utf-8") if request.body is not None else None,
                headers=headers,
                timeout=timeout,
            )
        except requests.RequestException as e:
            logger.warning("Request failed: %s: %s", request, e)
            raise TransportFailed(f"Unable to reach the service: {e}", request=request) from e

        logger.debug("%s returned HTTP %d", request, response.status_code)
        return response.status_code, response.text
