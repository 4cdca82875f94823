"""
jsonmend errors and resource limits.
"""

from .exceptions import ErrorLocation, JsonMendError, RepairError, SecurityError
from .limits import LimitValidator

__all__ = [
    "ErrorLocation",
    "JsonMendError",
    "RepairError",
    "SecurityError",
    "LimitValidator",
]
