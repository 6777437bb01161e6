"""
Application constants with documented reasoning.

This file centralizes "magic numbers" used throughout the codebase,
providing clear documentation for why each value was chosen.
"""

# =============================================================================
# THROTTLING
# =============================================================================

# Upload ceiling applied while anything is streaming, in bytes/sec.
# 1000 B/s keeps torrents connected to peers without competing with playback
THROTTLED_UPLOAD_LIMIT_BYTES = 1000

# qBittorrent treats a limit of 0 as "unlimited"
UNTHROTTLED_UPLOAD_LIMIT_BYTES = 0

# =============================================================================
# POLLING & MONITORING
# =============================================================================

# Session sample refresh interval
# 5 seconds balances responsiveness with API load on the media server
POLL_INTERVAL_SECONDS = 5

# Trailing window Jellyfin uses to decide whether a session is "active"
ACTIVE_WITHIN_SECONDS = 5

# =============================================================================
# HTTP CLIENT TIMEOUTS
# =============================================================================

# General HTTP client timeout (qBittorrent, Jellyfin)
# Bounds how long a single hung request can stall the loop
HTTP_CLIENT_TIMEOUT_SECONDS = 10

# Shutdown timeout for restoring the unthrottled limit
# Allows time for a slow client but doesn't hang shutdown indefinitely
SHUTDOWN_RESTORE_TIMEOUT_SECONDS = 15

# =============================================================================
# LOGGING
# =============================================================================

LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "7 days"

# =============================================================================
# EXIT CODES
# =============================================================================

EXIT_OK = 0
EXIT_FAILURE = 1
