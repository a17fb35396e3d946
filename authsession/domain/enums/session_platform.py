"""Session platform tag.

Refresh tokens record the client platform they were issued to. Rows written
before the tag was a closed set may hold free-form strings (``"Web"``,
``"iPhone"``) or nothing at all; ``migrate_platform`` is the single place that
maps those stored values onto the enum.
"""

from enum import Enum


class SessionPlatform(str, Enum):
    """Client platform of a session."""

    WEB = "web"
    IOS = "ios"
    ANDROID = "android"
    UNKNOWN = "unknown"

    @classmethod
    def breakdown_platforms(cls) -> tuple["SessionPlatform", ...]:
        """Platforms that appear in the statistics breakdown."""
        return (cls.WEB, cls.IOS, cls.ANDROID)


_LEGACY_ALIASES: dict[str, SessionPlatform] = {
    "web": SessionPlatform.WEB,
    "browser": SessionPlatform.WEB,
    "ios": SessionPlatform.IOS,
    "iphone": SessionPlatform.IOS,
    "ipad": SessionPlatform.IOS,
    "android": SessionPlatform.ANDROID,
}


def migrate_platform(stored: str | None) -> SessionPlatform:
    """Map a stored platform value onto SessionPlatform.

    Args:
        stored: Raw column value, possibly legacy free-form text or None.

    Returns:
        Matching platform, or UNKNOWN for missing and unrecognized values.

    Example:
        >>> migrate_platform("iPhone")
        <SessionPlatform.IOS: 'ios'>
        >>> migrate_platform(None)
        <SessionPlatform.UNKNOWN: 'unknown'>
    """
    if stored is None:
        return SessionPlatform.UNKNOWN
    return _LEGACY_ALIASES.get(stored.strip().lower(), SessionPlatform.UNKNOWN)
