"""Overpass prediction results."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class OverpassResult:
    """Predicted next overpass of one satellite over a ground point.

    Attributes:
        satellite_name: Name of the satellite
        predicted_time: UTC datetime of the pass, or None when no pass
            was found within the search horizon
        error: Reason the search for this satellite was abandoned, if any
    """
    satellite_name: str
    predicted_time: datetime | None
    error: str | None = None

    @property
    def found(self) -> bool:
        """Check if a pass was predicted."""
        return self.predicted_time is not None

    def time_until(self, now: datetime | None = None) -> float | None:
        """Seconds from now until the pass, or None if absent."""
        if self.predicted_time is None:
            return None
        now = now or datetime.now(timezone.utc)
        return (self.predicted_time - now).total_seconds()

    def format_time(self) -> str:
        """Format the pass time as a human-readable string."""
        if self.predicted_time is None:
            return "Unable to predict"
        return self.predicted_time.strftime("%Y-%m-%d %H:%M UTC")

    def to_dict(self) -> dict:
        return {
            "satellite": self.satellite_name,
            "next_overpass": (
                self.predicted_time.isoformat() if self.predicted_time else None
            ),
            "error": self.error,
        }
