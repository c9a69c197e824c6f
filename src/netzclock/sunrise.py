"""Sunrise acquisition layer: location lookup, sunrise-sunset.org fetch, and manual entry."""

import logging
from datetime import date, datetime

import httpx
from pytz import utc

logger = logging.getLogger(__name__)

SUNRISE_API_URL = "https://api.sunrise-sunset.org/json"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_USER_AGENT = "netzclock/1.0"


class SunriseError(Exception):
    """Sunrise could not be acquired."""


class LocationDeniedError(SunriseError):
    """Browser refused or failed to report a position."""


class LocationError(SunriseError):
    """Place name could not be resolved to coordinates."""


class SunriseFetchError(SunriseError):
    """sunrise-sunset.org call failure."""

    def __init__(self, message: str, network: bool = False) -> None:
        super().__init__(message)
        self.network = network  # True for transport/HTTP errors, False for bad API data


class ManualTimeError(SunriseError):
    """Manual HH:MM input is malformed."""


def fetch_sunrise(
    lat: float, lng: float, on: date | None = None, timeout: float = 10
) -> datetime:
    """Fetch the sunrise instant for a position from sunrise-sunset.org.

    Args:
        lat: Latitude (decimal degrees).
        lng: Longitude (decimal degrees).
        on: Calendar date. Defaults to today on the host clock.
        timeout: Request timeout in seconds.

    Returns:
        Sunrise as a UTC datetime.

    Raises:
        SunriseFetchError: On network failure, non-OK status, or a malformed body.
    """
    on = on or date.today()
    params = {
        "lat": lat,
        "lng": lng,
        "date": on.isoformat(),
        "formatted": 0,
    }
    try:
        resp = httpx.get(SUNRISE_API_URL, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPError as e:
        raise SunriseFetchError(f"sunrise-sunset request failed: {e}", network=True) from e
    except ValueError as e:
        raise SunriseFetchError(f"sunrise-sunset returned invalid JSON: {e}") from e

    status = data.get("status") if isinstance(data, dict) else None
    if status != "OK":
        raise SunriseFetchError(f"sunrise-sunset error: {status}")
    try:
        raw = data["results"]["sunrise"]
        sunrise = datetime.fromisoformat(raw)
    except (KeyError, TypeError, ValueError) as e:
        raise SunriseFetchError(f"sunrise-sunset returned no usable sunrise: {e}") from e

    if sunrise.tzinfo is None:
        sunrise = utc.localize(sunrise)
    sunrise = sunrise.astimezone(utc)
    logger.info("Sunrise for %.4f,%.4f on %s: %s", lat, lng, on, sunrise.isoformat())
    return sunrise


def geocode_place(query: str, timeout: float = 10) -> tuple[float, float, str]:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name).

    Raises:
        LocationError: On API failure or when the place cannot be found.
    """
    params = {"q": query, "format": "json", "limit": 1}
    headers = {"User-Agent": _USER_AGENT}
    try:
        resp = httpx.get(NOMINATIM_URL, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
        results = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise LocationError(f"Geocoder request failed: {e}") from e
    if not results:
        raise LocationError(f"Place not found: {query}")
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def location_from_geolocation(payload: dict | None) -> tuple[float, float]:
    """Extract (lat, lng) from a browser geolocation result.

    The payload is either ``{"coords": {"latitude": .., "longitude": ..}, ...}``
    or ``{"error": {"code": .., "message": ..}}``.

    Raises:
        LocationDeniedError: On an error payload or missing coordinates.
    """
    if not payload:
        raise LocationDeniedError("No position reported")
    if "error" in payload:
        err = payload["error"] or {}
        message = err.get("message", "unknown") if isinstance(err, dict) else err
        raise LocationDeniedError(f"Position unavailable: {message}")
    try:
        coords = payload["coords"]
        return float(coords["latitude"]), float(coords["longitude"])
    except (KeyError, TypeError, ValueError) as e:
        raise LocationDeniedError(f"Malformed position: {e}") from e


def parse_manual_time(text: str, now: datetime | None = None) -> datetime:
    """Turn "HH:MM" into today's instant at that local time.

    Args:
        text: Time string, e.g. "07:15".
        now: Reference instant for "today" and the local timezone. Defaults to
            the host clock.

    Returns:
        Timezone-aware datetime with seconds zeroed.

    Raises:
        ManualTimeError: On a non-numeric or out-of-range hour/minute.
    """
    parts = text.strip().split(":")
    if len(parts) != 2:
        raise ManualTimeError(f"Expected HH:MM, got {text!r}")
    try:
        hours, minutes = (int(p) for p in parts)
    except ValueError as e:
        raise ManualTimeError(f"Expected HH:MM, got {text!r}") from e
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ManualTimeError(f"Time out of range: {text!r}")

    now = now or datetime.now().astimezone()
    return now.replace(hour=hours, minute=minutes, second=0, microsecond=0)
