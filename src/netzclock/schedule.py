"""Stage scheduling. Derives today's stage instants and evaluates them against a clock.

Everything here is pure except ``check_crossings``, which records emitted names
in the caller-owned ``notified`` set.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from netzclock.models import DerivedStage, StageDefinition

DEFAULT_STAGES: tuple[StageDefinition, ...] = (
    StageDefinition("Opening", -45),
    StageDefinition("Thanksgiving", -25),
    StageDefinition("Praised", -10),
    StageDefinition("Hear", -4, -30),
    StageDefinition("Truth", -2),
    StageDefinition("Sunrise", 0),
)


class StageValidationError(ValueError):
    """Stage list breaks the unique, non-empty name rule."""


def validate_stages(stages: Iterable[StageDefinition]) -> tuple[StageDefinition, ...]:
    """Return the stages as a tuple after checking that names are non-empty and unique.

    Raises:
        StageValidationError: On an empty or repeated name.
    """
    result = tuple(stages)
    seen: set[str] = set()
    for stage in result:
        if not stage.name or not stage.name.strip():
            raise StageValidationError("Stage name must not be empty")
        if stage.name in seen:
            raise StageValidationError(f"Duplicate stage name: {stage.name}")
        seen.add(stage.name)
    return result


def derive(
    sunrise: datetime, stages: Iterable[StageDefinition]
) -> tuple[DerivedStage, ...]:
    """Resolve each stage's offset against sunrise.

    Args:
        sunrise: Today's sunrise instant.
        stages: Stage definitions, in display order.

    Returns:
        One DerivedStage per definition, in the same order as the input.
    """
    return tuple(
        DerivedStage(
            definition=stage,
            instant=sunrise + timedelta(seconds=stage.total_offset_seconds),
        )
        for stage in stages
    )


def next_pending(
    derived: Sequence[DerivedStage], now: datetime
) -> tuple[DerivedStage | None, int]:
    """First stage in list order whose instant is strictly after now, with its index.

    Returns (None, -1) when every stage has passed.
    """
    for index, stage in enumerate(derived):
        if stage.instant > now:
            return stage, index
    return None, -1


def time_remaining(stage: DerivedStage | None, now: datetime) -> timedelta:
    """Time until the stage, clamped at zero."""
    if stage is None:
        return timedelta(0)
    return max(timedelta(0), stage.instant - now)


def check_crossings(
    derived: Sequence[DerivedStage],
    now: datetime,
    notified: set[str],
    window: timedelta,
) -> list[str]:
    """Names of stages whose boundary lies within ``window`` of now and not yet notified.

    The window must be at least one tick wide or a crossing can fall between
    two readings. Emitted names are added to ``notified``, so a stage is
    returned at most once however many ticks land inside its window.

    Args:
        derived: Current derived schedule.
        now: Current clock reading.
        notified: Names already emitted this epoch. Updated in place.
        window: Proximity tolerance (exclusive).

    Returns:
        Newly crossed names, in schedule order.
    """
    crossed: list[str] = []
    for stage in derived:
        if stage.name in notified:
            continue
        if abs(now - stage.instant) < window:
            notified.add(stage.name)
            crossed.append(stage.name)
    return crossed
