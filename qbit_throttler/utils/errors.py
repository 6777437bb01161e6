"""
Classified errors for the throttling loop.

Every failure talking to qBittorrent or Jellyfin is raised as one of three
kinds, and the control loop branches on the kind rather than on the raw
exception:

    TRANSIENT           network/transport failure, unexpected status code
    AUTH_REJECTED       HTTP 401/403 on a credential-bearing call
    PROTOCOL_VIOLATION  response shape breaks the contract (e.g. no cookie)
"""
from enum import Enum
from typing import List, Optional

# Status codes that mean the credential was not accepted
AUTH_REJECTED_STATUSES = (401, 403)


class ErrorKind(str, Enum):
    """Classification tags that drive retry/re-auth/fatal branching."""

    TRANSIENT = "TRANSIENT"
    AUTH_REJECTED = "AUTH_REJECTED"
    PROTOCOL_VIOLATION = "PROTOCOL_VIOLATION"


class Phase(str, Enum):
    """Which remote call an error came from."""

    LOGIN = "login"
    SAMPLE = "sample"
    APPLY = "apply"


class ThrottlerError(Exception):
    """Base class for classified errors."""

    kind: ErrorKind

    def __init__(self, message: str, phase: Phase, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"[{self.phase.value}] {self.message} (HTTP {self.status})"
        return f"[{self.phase.value}] {self.message}"


class TransientError(ThrottlerError):
    """Recovered by waiting and retrying the same phase."""

    kind = ErrorKind.TRANSIENT


class AuthRejectedError(ThrottlerError):
    """The torrent client refused the credential (401/403)."""

    kind = ErrorKind.AUTH_REJECTED


class ProtocolViolationError(ThrottlerError):
    """The response did not contain what the contract promises."""

    kind = ErrorKind.PROTOCOL_VIOLATION


class ConfigurationError(Exception):
    """Startup configuration is missing or invalid."""

    def __init__(self, missing: List[str], invalid: Optional[List[str]] = None):
        self.missing = missing
        self.invalid = invalid or []
        parts = []
        if self.missing:
            parts.append(f"missing: {', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"invalid: {', '.join(self.invalid)}")
        super().__init__("Configuration error - " + "; ".join(parts))


def classify_status(status: int, phase: Phase, service: str) -> ThrottlerError:
    """
    Map a non-success HTTP status to a classified error.

    Args:
        status: HTTP status code returned by the remote service
        phase: Which call produced the status
        service: Display name of the remote service, for the message

    Returns:
        AuthRejectedError for 401/403, TransientError otherwise
    """
    message = f"Bad response from {service}: {status}"
    if status in AUTH_REJECTED_STATUSES:
        return AuthRejectedError(message, phase, status)
    return TransientError(message, phase, status)
