"""Notification engine, the single owner of sunrise, schedule, clock reading and notified set."""

import dataclasses
import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from netzclock.models import (
    CountdownView,
    DerivedStage,
    StageDefinition,
    SunriseSource,
)
from netzclock.schedule import (
    check_crossings,
    derive,
    next_pending,
    time_remaining,
    validate_stages,
)

logger = logging.getLogger(__name__)

CrossingConsumer = Callable[[str], None]


class NotificationEngine:
    """Tick-driven countdown state.

    Each sunrise value opens an epoch. Within an epoch every stage moves
    Pending → Notified at most once; only a new sunrise returns them to Pending.

    Once a manual sunrise has been applied, automatic deliveries are ignored,
    so a slow location lookup cannot overwrite what the user typed.
    """

    def __init__(
        self,
        stages: Iterable[StageDefinition],
        window: timedelta = timedelta(seconds=1),
        on_crossing: CrossingConsumer | None = None,
    ) -> None:
        if window <= timedelta(0):
            raise ValueError("Crossing window must be positive")
        self._stages = validate_stages(stages)
        self._window = window
        self._on_crossing = on_crossing
        self._sunrise: datetime | None = None
        self._sunrise_source: SunriseSource | None = None
        self._schedule: tuple[DerivedStage, ...] = ()
        self._notified: set[str] = set()
        self._now: datetime | None = None

    @property
    def stages(self) -> tuple[StageDefinition, ...]:
        return self._stages

    @property
    def sunrise(self) -> datetime | None:
        return self._sunrise

    @property
    def sunrise_source(self) -> SunriseSource | None:
        return self._sunrise_source

    @property
    def schedule(self) -> tuple[DerivedStage, ...]:
        return self._schedule

    @property
    def notified(self) -> frozenset[str]:
        return frozenset(self._notified)

    @property
    def now(self) -> datetime | None:
        return self._now

    @property
    def window(self) -> timedelta:
        return self._window

    # --- Sunrise path ---

    def set_sunrise(self, instant: datetime, source: SunriseSource) -> bool:
        """Apply a sunrise delivery and start a new epoch.

        Returns:
            True if the delivery was applied, False if it was ignored.
        """
        if (
            source is SunriseSource.AUTOMATIC
            and self._sunrise_source is SunriseSource.MANUAL
        ):
            logger.info("Ignoring automatic sunrise %s: manual value in effect", instant)
            return False
        if (
            source is SunriseSource.AUTOMATIC
            and self._sunrise_source is SunriseSource.AUTOMATIC
            and instant == self._sunrise
        ):
            logger.debug("Sunrise %s re-delivered, keeping current epoch", instant)
            return True

        self._sunrise = instant
        self._sunrise_source = source
        self._schedule = derive(instant, self._stages)
        self._notified.clear()
        logger.info("New sunrise epoch: %s (%s)", instant.isoformat(), source.value)
        return True

    def clear_sunrise(self) -> None:
        """Drop back to the no-sunrise state: no schedule, no countdown."""
        self._sunrise = None
        self._sunrise_source = None
        self._schedule = ()
        self._notified.clear()

    # --- Stage definition path ---

    def set_stages(self, stages: Iterable[StageDefinition]) -> None:
        """Replace the stage list and re-derive.

        Notified markers of stages that still exist are kept; the epoch continues.

        Raises:
            StageValidationError: On empty or duplicate names.
        """
        self._stages = validate_stages(stages)
        if self._sunrise is not None:
            self._schedule = derive(self._sunrise, self._stages)
        names = {stage.name for stage in self._stages}
        self._notified &= names

    def update_stage(
        self,
        index: int,
        offset_minutes: int | None = None,
        offset_seconds: int | None = None,
    ) -> StageDefinition:
        """Replace one stage's offsets with a new definition. Returns the new definition."""
        current = self._stages[index]
        changes: dict[str, int] = {}
        if offset_minutes is not None:
            changes["offset_minutes"] = offset_minutes
        if offset_seconds is not None:
            changes["offset_seconds"] = offset_seconds
        updated = dataclasses.replace(current, **changes)
        stages = list(self._stages)
        stages[index] = updated
        self.set_stages(stages)
        return updated

    def update_stage_from_input(self, index: int, field: str, value) -> StageDefinition:
        """Apply an offset typed into the stage editor.

        The editor takes amounts before sunrise, so the entry is stored
        negated. Empty or non-numeric entries store 0.

        Args:
            index: Position of the stage in the list.
            field: "minutes" or "seconds".
            value: Raw editor value.

        Raises:
            ValueError: On an unknown field.
        """
        if field not in ("minutes", "seconds"):
            raise ValueError(f"Unknown offset field: {field!r}")
        try:
            amount = -int(value)
        except (TypeError, ValueError):
            amount = 0
        if field == "minutes":
            return self.update_stage(index, offset_minutes=amount)
        return self.update_stage(index, offset_seconds=amount)

    # --- Tick path ---

    def tick(self, now: datetime) -> list[str]:
        """Advance the clock reading and emit any newly crossed stages.

        Each new crossing is handed to the crossing consumer. A failing
        consumer is logged; the stage stays notified either way.

        Returns:
            Names crossed on this tick, in schedule order.
        """
        self._now = now
        crossed = check_crossings(self._schedule, now, self._notified, self._window)
        for name in crossed:
            logger.info("Stage crossed: %s", name)
            if self._on_crossing is None:
                continue
            try:
                self._on_crossing(name)
            except Exception:
                logger.exception("Notification for stage %s failed", name)
        return crossed

    def view(self, now: datetime | None = None) -> CountdownView:
        """Snapshot for display consumers, as of ``now`` or the last tick."""
        reading = now if now is not None else self._now
        if self._sunrise is None or reading is None:
            return CountdownView(
                sunrise=self._sunrise,
                schedule=self._schedule,
                next_stage=None,
                next_index=-1,
                time_remaining=timedelta(0),
            )
        stage, index = next_pending(self._schedule, reading)
        return CountdownView(
            sunrise=self._sunrise,
            schedule=self._schedule,
            next_stage=stage,
            next_index=index,
            time_remaining=time_remaining(stage, reading),
        )
