"""
Session credential for the qBittorrent Web API.
"""
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """
    Opaque session token returned by a successful qBittorrent login.

    The token is the raw ``Set-Cookie`` value and is sent back verbatim as the
    ``Cookie`` header. Held in memory only and replaced wholesale on re-login.
    """
    model_config = ConfigDict(frozen=True)

    cookie: str = Field(..., min_length=1)
    obtained_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def masked(self) -> str:
        """Cookie name with the value hidden, safe for logs."""
        name, _, value = self.cookie.partition("=")
        if not value:
            return "***"
        return f"{name}=***"

    def __repr__(self) -> str:
        return f"Credential(cookie={self.masked!r}, obtained_at={self.obtained_at.isoformat()!r})"

    __str__ = __repr__
