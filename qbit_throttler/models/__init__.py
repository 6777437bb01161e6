"""
Data models for qBit Throttler.
"""
from qbit_throttler.models.session import Credential
from qbit_throttler.models.decision import ThrottleLevel, ThrottleDecision

__all__ = [
    "Credential",
    "ThrottleLevel",
    "ThrottleDecision",
]
