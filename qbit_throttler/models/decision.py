"""
Throttle decision model.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ThrottleLevel(str, Enum):
    """Binary throttle state for the torrent client's upload ceiling."""

    THROTTLED = "throttled"
    UNTHROTTLED = "unthrottled"


class ThrottleDecision(BaseModel):
    """Result of mapping one session sample to an upload limit."""
    model_config = ConfigDict(frozen=True)

    level: ThrottleLevel
    upload_limit: int = Field(..., ge=0, description="Bytes/sec, 0 = unlimited")
    session_count: int = Field(..., ge=0)
