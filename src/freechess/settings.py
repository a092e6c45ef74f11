"""Connection settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SessionSettings:
    """User-configurable settings for one server connection."""

    # Login
    username: str = "guest"
    password: str = ""

    # Hours from UTC assumed for dates whose zone the server leaves unknown
    default_timezone: float = 0.0

    # Scramble outbound lines with timeseal (required by freechess.org:5001)
    timeseal: bool = True
