"""
qBit Throttler - caps qBittorrent uploads while Jellyfin is streaming.
"""
__version__ = "0.1.0"
