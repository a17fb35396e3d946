"""Session statistics read model."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class PlatformBreakdown:
    """Usable sessions per known platform."""

    web: int = 0
    ios: int = 0
    android: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"web": self.web, "ios": self.ios, "android": self.android}


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionStats:
    """Aggregate over usable refresh tokens at one instant.

    Invariants:
        - total == active + inactive
        - sum(by_platform) <= total (sessions with an unknown platform are
          counted in the totals only)

    Attributes:
        total: Usable sessions.
        active: Usable sessions with recent activity.
        inactive: Usable sessions without recent activity.
        by_platform: Usable sessions per known platform.
    """

    total: int = 0
    active: int = 0
    inactive: int = 0
    by_platform: PlatformBreakdown = field(default_factory=PlatformBreakdown)

    def __post_init__(self) -> None:
        if self.total != self.active + self.inactive:
            raise ValueError("total must equal active + inactive")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the public read-model shape.

        Returns:
            dict: ``{total, active, inactive, byPlatform: {web, ios, android}}``.
        """
        return {
            "total": self.total,
            "active": self.active,
            "inactive": self.inactive,
            "byPlatform": self.by_platform.to_dict(),
        }
