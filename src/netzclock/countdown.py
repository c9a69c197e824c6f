"""CLI entry point for the terminal countdown.

Usage:
    netzclock --sunrise 06:12            # Manual sunrise, count down in the terminal
    netzclock --lat 31.77 --lng 35.21    # Fetch today's sunrise for a position
    netzclock --place "Jerusalem" --once # Print today's schedule and exit
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime
from pathlib import Path

import click
from dotenv import load_dotenv
from pytz import utc

from netzclock.config import load_settings
from netzclock.engine import NotificationEngine
from netzclock.i18n import stage_label, t
from netzclock.models import SunriseSource
from netzclock.renderers.terminal import render_schedule_table, render_status_line
from netzclock.store import load_stages
from netzclock.sunrise import (
    LocationError,
    ManualTimeError,
    SunriseFetchError,
    fetch_sunrise,
    geocode_place,
    parse_manual_time,
)

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    fmt = "%(asctime)s — %(name)s — %(levelname)s — %(message)s"
    logging.basicConfig(level=level, format=fmt, handlers=[logging.StreamHandler(sys.stderr)])

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _ring(name: str) -> None:
    click.echo("\a", nl=False)


def _resolve_sunrise(
    sunrise: str | None,
    lat: float | None,
    lng: float | None,
    place: str | None,
    timeout: float,
    lang: str,
) -> tuple[datetime, SunriseSource]:
    if sunrise:
        try:
            return parse_manual_time(sunrise), SunriseSource.MANUAL
        except ManualTimeError as e:
            raise click.ClickException(f"{t('error_format', lang)}: {e}") from e

    if place:
        try:
            lat, lng, display = geocode_place(place, timeout=timeout)
        except LocationError as e:
            raise click.ClickException(str(e)) from e
        logger.info("Resolved %r to %s", place, display)

    if lat is None or lng is None:
        raise click.UsageError("Specify --sunrise, --place, or both --lat and --lng.")
    try:
        return fetch_sunrise(lat, lng, timeout=timeout), SunriseSource.AUTOMATIC
    except SunriseFetchError as e:
        key = "error_network" if e.network else "error_api"
        raise click.ClickException(f"{t(key, lang)} ({e})") from e


@click.command()
@click.option("--sunrise", default=None, help="Today's sunrise as HH:MM (local time)")
@click.option("--lat", type=float, default=None, help="Latitude for the sunrise lookup")
@click.option("--lng", type=float, default=None, help="Longitude for the sunrise lookup")
@click.option("--place", default=None, help="Place name to geocode for the sunrise lookup")
@click.option("--stages", "stages_path", type=click.Path(path_type=Path), default=None, help="Stage store file")
@click.option("--lang", type=click.Choice(["he", "en"]), default=None, help="Output language")
@click.option("--once", is_flag=True, help="Print the schedule and status, then exit")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(
    sunrise: str | None,
    lat: float | None,
    lng: float | None,
    place: str | None,
    stages_path: Path | None,
    lang: str | None,
    once: bool,
    verbose: bool,
) -> None:
    """Count down to today's sunrise stages in the terminal."""
    load_dotenv()
    _setup_logging(verbose=verbose)
    settings = load_settings()
    lang = lang or settings.lang

    instant, source = _resolve_sunrise(
        sunrise, lat, lng, place, settings.http_timeout, lang
    )
    engine = NotificationEngine(
        load_stages(stages_path or settings.stages_path),
        window=settings.window,
        on_crossing=_ring,
    )
    engine.set_sunrise(instant, source)

    engine.tick(datetime.now(utc))
    click.echo(render_schedule_table(engine.view(), lang))
    if once:
        click.echo(render_status_line(engine.view(), lang))
        return

    try:
        while True:
            crossed = engine.tick(datetime.now(utc))
            for name in crossed:
                click.echo(f"\n✦ {stage_label(name, lang)}")
            view = engine.view()
            click.echo(f"\r{render_status_line(view, lang)}   ", nl=False)
            if view.next_stage is None:
                click.echo()
                break
            time.sleep(settings.tick_seconds)
    except KeyboardInterrupt:
        click.echo()


if __name__ == "__main__":
    main()
