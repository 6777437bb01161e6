"""
Utility modules for qBit Throttler.
"""
from qbit_throttler.utils.correlation import poll_cycle, get_cycle_id
from qbit_throttler.utils.errors import (
    ErrorKind,
    Phase,
    ThrottlerError,
    TransientError,
    AuthRejectedError,
    ProtocolViolationError,
    ConfigurationError,
    classify_status,
)

__all__ = [
    "poll_cycle",
    "get_cycle_id",
    "ErrorKind",
    "Phase",
    "ThrottlerError",
    "TransientError",
    "AuthRejectedError",
    "ProtocolViolationError",
    "ConfigurationError",
    "classify_status",
]
