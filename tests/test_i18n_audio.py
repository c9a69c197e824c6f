"""Tests for translations and the notification sound."""

import io
import wave

from netzclock.audio import SAMPLE_RATE, notification_wav
from netzclock.i18n import stage_label, t, text_direction


def test_translation_lookup_and_fallbacks():
    assert t("btn_update", "he") == "עדכן"
    assert t("btn_update", "en") == "Update"
    assert t("btn_update", "fr") == "Update"
    assert t("no_such_key", "he") == "no_such_key"


def test_stage_labels():
    assert stage_label("Opening", "he") == "פתיחה"
    assert stage_label("Hear", "en") == "Hear"
    assert stage_label("My custom stage", "he") == "My custom stage"


def test_text_direction():
    assert text_direction("he") == "rtl"
    assert text_direction("en") == "ltr"


def test_notification_wav_is_valid():
    data = notification_wav()
    with wave.open(io.BytesIO(data), "rb") as w:
        assert w.getnchannels() == 1
        assert w.getsampwidth() == 2
        assert w.getframerate() == SAMPLE_RATE
        assert w.getnframes() == int(SAMPLE_RATE * 0.35)
