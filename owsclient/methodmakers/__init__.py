"""The method makers construct the HTTP requests for each service operation.

They are pure functions of their arguments; the constructed
:class:`OwsRequest` can be sent by any transport.
"""

from .base import BaseMethodMaker, OwsRequest
from .csw import CSWMethodMakerGetCapabilities, CSWMethodMakerGetDataRecords, ResultType
from .sos import SOSMethodMaker

__all__ = (
    "BaseMethodMaker",
    "OwsRequest",
    "ResultType",
    "CSWMethodMakerGetCapabilities",
    "CSWMethodMakerGetDataRecords",
    "SOSMethodMaker",
)
