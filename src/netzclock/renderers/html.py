"""HTML countdown renderer.

Produces HTML fragments for st.markdown(unsafe_allow_html=True): the big
countdown and the read-only stage list. All strings that originate from
user data (stage names) are escaped.
"""

from __future__ import annotations

import html
from datetime import datetime, timedelta

from netzclock.i18n import stage_label, t, text_direction
from netzclock.models import CountdownView

_ACCENT = "#facc15"
_ROW_BG = "rgba(31,41,55,0.6)"
_ROW_ACTIVE_BG = "rgba(234,179,8,0.2)"
_TEXT = "#d1d5db"


def format_time_left(remaining: timedelta) -> str:
    """HH:MM:SS with seconds floored. Negative durations render as zero."""
    total_seconds = max(0, int(remaining.total_seconds()))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_local_time(instant: datetime) -> str:
    """24-hour HH:MM:SS on the host clock's local timezone."""
    return instant.astimezone().strftime("%H:%M:%S")


def render_countdown_html(view: CountdownView, lang: str = "he") -> str:
    """Return the countdown block: heading with the next stage, then the timer."""
    if view.next_stage is not None:
        name = html.escape(stage_label(view.next_stage.name, lang))
        heading = t("countdown_until", lang).format(name=name)
    else:
        heading = t("done_today", lang)
    return (
        f'<div class="netz-countdown" dir="{text_direction(lang)}" style="text-align:center">'
        f'<h2 style="color:{_ACCENT};font-weight:300;margin-bottom:0.5rem">{heading}</h2>'
        f'<div style="font-family:monospace;font-size:6rem;font-weight:700;color:#fff;'
        f'letter-spacing:0.05em">{format_time_left(view.time_remaining)}</div>'
        f"</div>"
    )


def render_stage_list_html(view: CountdownView, lang: str = "he") -> str:
    """Return the stage list with today's times, highlighting the next pending stage."""
    direction = text_direction(lang)
    rows: list[str] = []
    for index, stage in enumerate(view.schedule):
        active = index == view.next_index
        bg = _ROW_ACTIVE_BG if active else _ROW_BG
        color = _ACCENT if active else _TEXT
        ring = f"box-shadow:0 0 0 2px {_ACCENT};" if active else ""
        rows.append(
            f'<div dir="{direction}" style="display:flex;justify-content:space-between;'
            f"padding:0.75rem;margin-bottom:0.5rem;border-radius:0.5rem;"
            f'background:{bg};color:{color};{ring}">'
            f"<span>{html.escape(stage_label(stage.name, lang))}</span>"
            f'<span style="font-family:monospace">{format_local_time(stage.instant)}</span>'
            f"</div>"
        )

    sunrise = format_local_time(view.sunrise) if view.sunrise is not None else "--:--:--"
    return (
        f'<div class="netz-stages" style="max-width:28rem;margin:2.5rem auto 0;'
        f'padding:1rem;border-radius:0.75rem;border:1px solid #374151;background:rgba(17,24,39,0.5)">'
        f'<div dir="{direction}" style="display:flex;justify-content:space-between;'
        f'border-bottom:1px solid #4b5563;padding-bottom:0.75rem;margin-bottom:0.75rem">'
        f'<span style="color:#e5e7eb;font-weight:600">{t("schedule_title", lang)}</span>'
        f'<span style="color:{_ACCENT};font-family:monospace">☀ {sunrise}</span>'
        f"</div>"
        f'{"".join(rows)}'
        f"</div>"
    )
