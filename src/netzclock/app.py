"""Sunrise countdown — Streamlit app counting down to today's sunrise stages."""

import html
from datetime import datetime

import streamlit as st
from dotenv import load_dotenv
from pytz import utc
from streamlit_js_eval import get_geolocation

load_dotenv()

from netzclock.audio import notification_wav  # noqa: E402
from netzclock.config import load_settings  # noqa: E402
from netzclock.engine import NotificationEngine  # noqa: E402
from netzclock.i18n import stage_label, t, text_direction  # noqa: E402
from netzclock.models import SunriseSource  # noqa: E402
from netzclock.renderers.html import (  # noqa: E402
    render_countdown_html,
    render_stage_list_html,
)
from netzclock.store import load_stages, save_stages  # noqa: E402
from netzclock.sunrise import (  # noqa: E402
    LocationDeniedError,
    ManualTimeError,
    SunriseFetchError,
    fetch_sunrise,
    location_from_geolocation,
    parse_manual_time,
)

_settings = load_settings()
_lang: str = _settings.lang
_dir = text_direction(_lang)

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="centered",
    initial_sidebar_state="collapsed",
)


def _queue_sound(name: str) -> None:
    st.session_state.pending_sounds.append(name)


# --- Session state initialization ---

if "engine" not in st.session_state:
    st.session_state.engine = NotificationEngine(
        load_stages(_settings.stages_path),
        window=_settings.window,
        on_crossing=_queue_sound,
    )
if "pending_sounds" not in st.session_state:
    st.session_state.pending_sounds = []
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "location_done" not in st.session_state:
    st.session_state.location_done = False
if "editing" not in st.session_state:
    st.session_state.editing = False
if "manual_input" not in st.session_state:
    st.session_state.manual_input = ""

engine: NotificationEngine = st.session_state.engine

# --- Dark theme CSS (static) ---
st.markdown(
    """
    <style>
    /* Hide streamlit_js_eval invisible iframe */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #000000 !important;
        color: #ffffff;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .netz-error {
        color: #f87171;
        background: rgba(127,29,29,0.5);
        padding: 1rem;
        border-radius: 0.5rem;
        text-align: center;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Location → sunrise (runs once per session) ---
# get_geolocation returns None on the first run; the rerun it triggers
# delivers either a position or an error payload.
if not st.session_state.location_done:
    _position = get_geolocation()
    if _position is None:
        st.markdown(
            f"<div dir='{_dir}' style='text-align:center;padding-top:30vh'>"
            f"<h1>☀ {t('loading_title', _lang)}</h1>"
            f"<p style='color:#9ca3af'>{t('loading_body', _lang)}</p></div>",
            unsafe_allow_html=True,
        )
        st.stop()

    st.session_state.location_done = True
    try:
        lat, lng = location_from_geolocation(_position)
        _sunrise = fetch_sunrise(lat, lng, timeout=_settings.http_timeout)
    except LocationDeniedError:
        st.session_state.error_msg = t("error_location", _lang)
    except SunriseFetchError as e:
        st.session_state.error_msg = t("error_network" if e.network else "error_api", _lang)
    else:
        if engine.set_sunrise(_sunrise, SunriseSource.AUTOMATIC):
            st.session_state.manual_input = _sunrise.astimezone().strftime("%H:%M")
            st.session_state.error_msg = None


def _submit_manual_time() -> None:
    text = st.session_state.manual_input
    if not text:
        return
    try:
        sunrise = parse_manual_time(text)
    except ManualTimeError:
        st.session_state.error_msg = t("error_format", _lang)
        return
    engine.set_sunrise(sunrise, SunriseSource.MANUAL)
    st.session_state.error_msg = None


def _update_offset(index: int, field: str) -> None:
    engine.update_stage_from_input(index, field, st.session_state.get(f"{field}_{index}"))
    save_stages(_settings.stages_path, engine.stages)


def _toggle_edit() -> None:
    st.session_state.editing = not st.session_state.editing


# --- Countdown (re-evaluated every tick) ---


@st.fragment(run_every=_settings.tick_seconds)
def _countdown() -> None:
    engine.tick(datetime.now(utc))
    view = engine.view()
    st.markdown(render_countdown_html(view, _lang), unsafe_allow_html=True)
    if not st.session_state.editing:
        st.markdown(render_stage_list_html(view, _lang), unsafe_allow_html=True)
    if st.session_state.pending_sounds:
        # One beep per tick, however many stages crossed together.
        st.session_state.pending_sounds.clear()
        st.audio(notification_wav(), format="audio/wav", autoplay=True)


def _stage_editor() -> None:
    for index, stage in enumerate(engine.stages):
        label = stage_label(stage.name, _lang)
        name_col, min_col, sec_col = st.columns([3, 2, 2])
        with name_col:
            st.markdown(
                f"<div dir='{_dir}' style='padding-top:2rem'>{html.escape(label)}"
                f" <small style='color:#9ca3af'>{t('before_sunrise', _lang)}</small></div>",
                unsafe_allow_html=True,
            )
        with min_col:
            st.number_input(
                t("label_minutes", _lang),
                min_value=0,
                step=1,
                value=abs(stage.offset_minutes),
                key=f"minutes_{index}",
                on_change=_update_offset,
                args=(index, "minutes"),
            )
        with sec_col:
            st.number_input(
                t("label_seconds", _lang),
                min_value=0,
                step=1,
                value=abs(stage.offset_seconds),
                key=f"seconds_{index}",
                on_change=_update_offset,
                args=(index, "seconds"),
            )


# --- Main layout ---

if st.session_state.error_msg and engine.sunrise is None:
    st.markdown(
        f"<div class='netz-error' dir='{_dir}'>{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

if engine.sunrise is not None:
    _countdown()
    st.button(
        t("btn_done", _lang) if st.session_state.editing else t("btn_edit", _lang),
        key="toggle_edit",
        on_click=_toggle_edit,
    )
    if st.session_state.editing:
        _stage_editor()
else:
    st.markdown(
        f"<div dir='{_dir}' style='text-align:center'>"
        f"<div style='font-size:4rem;color:#eab308'>☀</div>"
        f"<h1>{t('no_sunrise_title', _lang)}</h1>"
        f"<p style='color:#9ca3af'>{t('no_sunrise_body', _lang)}</p></div>",
        unsafe_allow_html=True,
    )

# --- Manual sunrise input ---
input_col, button_col = st.columns([3, 1])
with input_col:
    st.text_input(t("label_manual", _lang), key="manual_input", placeholder="HH:MM")
with button_col:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    st.button(t("btn_update", _lang), key="submit_manual", on_click=_submit_manual_time)

if st.session_state.error_msg and engine.sunrise is not None:
    st.markdown(
        f"<p dir='{_dir}' style='color:#f87171;text-align:center'>{st.session_state.error_msg}</p>",
        unsafe_allow_html=True,
    )
