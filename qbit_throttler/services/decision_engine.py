"""
Decision engine mapping a session sample to an upload limit.
"""
from loguru import logger
from qbit_throttler.constants import THROTTLED_UPLOAD_LIMIT_BYTES, UNTHROTTLED_UPLOAD_LIMIT_BYTES
from qbit_throttler.models import ThrottleDecision, ThrottleLevel


class DecisionEngine:
    """
    Binary throttle policy: any active session caps uploads, none lifts the cap.

    The magnitude of the session count never matters; one session and a
    thousand sessions produce the same limit.
    """

    def __init__(self, throttled_limit: int = THROTTLED_UPLOAD_LIMIT_BYTES):
        if throttled_limit <= 0:
            raise ValueError(f"Throttled upload limit must be positive, got {throttled_limit}")
        self.throttled_limit = throttled_limit

    def decide(self, session_count: int) -> ThrottleDecision:
        """Derive the throttle decision for one sample."""
        if session_count < 0:
            raise ValueError(f"Session count cannot be negative, got {session_count}")

        if session_count > 0:
            logger.debug(f"{session_count} session(s) active, throttling")
            return ThrottleDecision(
                level=ThrottleLevel.THROTTLED,
                upload_limit=self.throttled_limit,
                session_count=session_count
            )

        logger.debug("No session active, removing throttling")
        return ThrottleDecision(
            level=ThrottleLevel.UNTHROTTLED,
            upload_limit=UNTHROTTLED_UPLOAD_LIMIT_BYTES,
            session_count=0
        )
