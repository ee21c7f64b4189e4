"""Value objects that restrict which observations or records a service returns.

* :class:`BoundingBox` and :func:`encode_bbox` for the SOS ``BBOX`` parameter.
* :class:`CSWRecordsFilter` for the ``<ogc:Filter>`` of a CSW GetRecords request.
"""

from .bbox import BoundingBox, encode_bbox
from .csw import CSWRecordsFilter, SortType

__all__ = (
    "BoundingBox",
    "encode_bbox",
    "CSWRecordsFilter",
    "SortType",
)
