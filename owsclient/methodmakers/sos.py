"""Request construction for the Sensor Observation Service (SOS) 2.0.

This uses the KVP binding that 52North SOS servers offer. The parameters
are either sent as query string (GET) or as form-encoded body (POST).
"""

from __future__ import annotations

import logging
from datetime import datetime

from owsclient import conf
from owsclient.filters.bbox import BoundingBox, encode_bbox

from .base import CONTENT_TYPE_FORM, BaseMethodMaker, OwsRequest, urlencode
from .utils import value_to_text

logger = logging.getLogger(__name__)

__all__ = ("SOSMethodMaker",)

#: The property that the temporal filter applies to.
TEMPORAL_FILTER_REFERENCE = "om:phenomenonTime"


class SOSMethodMaker(BaseMethodMaker):
    """Construct the requests for a sensor observation service."""

    service = "SOS"

    def make_post_method(
        self,
        sos_url: str,
        request: str,
        feature_of_interest: str | None = None,
        begin_position: datetime | None = None,
        end_position: datetime | None = None,
        bbox: BoundingBox | None = None,
    ) -> OwsRequest:
        """Construct the request, with the parameters as form-encoded POST body.

        :param sos_url: The service endpoint.
        :param request: The operation, e.g. "GetObservation" or "GetCapabilities".
        :param feature_of_interest: Limit observations to this feature.
        :param begin_position: Start of the time period, must be given together with the end.
        :param end_position: End of the time period, must be given together with the start.
        :param bbox: Limit observations to this area.
        """
        params = self.get_parameters(
            request, feature_of_interest, begin_position, end_position, bbox
        )
        return self.make_post(sos_url, urlencode(params), content_type=CONTENT_TYPE_FORM)

    def make_get_method(
        self,
        sos_url: str,
        request: str,
        feature_of_interest: str | None = None,
        begin_position: datetime | None = None,
        end_position: datetime | None = None,
        bbox: BoundingBox | None = None,
    ) -> OwsRequest:
        """Construct the request, with the parameters in the query string."""
        params = self.get_parameters(
            request, feature_of_interest, begin_position, end_position, bbox
        )
        return self.make_get(sos_url, params)

    def get_parameters(
        self,
        request: str,
        feature_of_interest: str | None,
        begin_position: datetime | None,
        end_position: datetime | None,
        bbox: BoundingBox | None,
    ) -> dict[str, str]:
        """Collect the KVP parameters of the request."""
        params = {"service": "SOS", "request": request}
        if request == "GetCapabilities":
            params["acceptVersions"] = conf.OWSCLIENT_SOS_VERSION
        else:
            params["version"] = conf.OWSCLIENT_SOS_VERSION

        if feature_of_interest:
            params["featureOfInterest"] = feature_of_interest

        if begin_position is not None and end_position is not None:
            params["temporalFilter"] = (
                f"{TEMPORAL_FILTER_REFERENCE},"
                f"{value_to_text(begin_position)}/{value_to_text(end_position)}"
            )
        elif begin_position is not None or end_position is not None:
            # The caller should provide both, no default is assumed for the other end.
            logger.warning(
                "SOS %s request has an incomplete time period (begin=%s, end=%s), "
                "sending it without temporal filter.",
                request,
                begin_position,
                end_position,
            )

        if bbox is not None:
            params["BBOX"] = encode_bbox(bbox)

        return params
