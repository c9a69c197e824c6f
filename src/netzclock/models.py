"""Data model definitions — explicit boundaries between input, schedule, and render layers."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class SunriseSource(Enum):
    """Where a sunrise instant came from."""

    AUTOMATIC = "automatic"  # geolocation + sunrise-sunset.org
    MANUAL = "manual"  # typed HH:MM


@dataclass(frozen=True)
class StageDefinition:
    """A named point in the day, fixed relative to sunrise."""

    name: str  # Display name, also the notification identity key
    offset_minutes: int  # Signed; negative = before sunrise
    offset_seconds: int = 0  # Signed; added to offset_minutes * 60

    @property
    def total_offset_seconds(self) -> int:
        return self.offset_minutes * 60 + self.offset_seconds

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "offsetMinutes": self.offset_minutes,
            "offsetSeconds": self.offset_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StageDefinition":
        """Build from a stored mapping. Accepts camelCase or snake_case keys.

        Raises:
            KeyError, TypeError, ValueError: On a missing name/minutes or non-integer offsets.
        """
        minutes = data["offsetMinutes"] if "offsetMinutes" in data else data["offset_minutes"]
        seconds = data.get("offsetSeconds", data.get("offset_seconds"))
        if seconds is None:
            seconds = 0
        for value in (minutes, seconds):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Offset must be an integer: {value!r}")
        return cls(name=str(data["name"]), offset_minutes=minutes, offset_seconds=seconds)


@dataclass(frozen=True)
class DerivedStage:
    """A StageDefinition resolved against today's sunrise."""

    definition: StageDefinition
    instant: datetime  # sunrise + offset (timezone-aware)

    @property
    def name(self) -> str:
        return self.definition.name


@dataclass(frozen=True)
class CountdownView:
    """The sole input to display consumers. State as of the latest tick."""

    sunrise: datetime | None
    schedule: tuple[DerivedStage, ...]  # Input order, not re-sorted
    next_stage: DerivedStage | None  # None when all stages passed or no sunrise
    next_index: int  # Position of next_stage in schedule, -1 if none
    time_remaining: timedelta  # Never negative
