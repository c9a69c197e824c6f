"""Plain-text renderer for the CLI."""

from netzclock.i18n import stage_label, t
from netzclock.models import CountdownView
from netzclock.renderers.html import format_local_time, format_time_left


def render_status_line(view: CountdownView, lang: str = "en") -> str:
    """One line: the next stage and the time left, or the end-of-day notice."""
    if view.next_stage is None:
        return t("done_today", lang)
    heading = t("countdown_until", lang).format(name=stage_label(view.next_stage.name, lang))
    return f"{heading}  {format_time_left(view.time_remaining)}"


def render_schedule_table(view: CountdownView, lang: str = "en") -> str:
    """Stage list, one row per stage, the next pending one marked with '>'."""
    lines = [f"{t('schedule_title', lang)}"]
    if view.sunrise is not None:
        lines[0] += f"  (☀ {format_local_time(view.sunrise)})"
    labels = [stage_label(stage.name, lang) for stage in view.schedule]
    width = max((len(label) for label in labels), default=0)
    for index, (stage, label) in enumerate(zip(view.schedule, labels)):
        marker = ">" if index == view.next_index else " "
        lines.append(f"{marker} {label:<{width}}  {format_local_time(stage.instant)}")
    return "\n".join(lines)
