"""Notification sound: a short sine beep rendered to WAV bytes."""

import io
import math
import struct
import wave
from functools import lru_cache

SAMPLE_RATE = 8000


@lru_cache(maxsize=4)
def notification_wav(
    frequency: float = 880.0, duration: float = 0.35, volume: float = 0.6
) -> bytes:
    """Render a mono 16-bit beep with a short linear fade-out.

    Args:
        frequency: Tone frequency in Hz.
        duration: Length in seconds.
        volume: Peak amplitude in [0, 1].

    Returns:
        A complete WAV file as bytes.
    """
    n_samples = int(SAMPLE_RATE * duration)
    fade = max(1, n_samples // 5)
    peak = int(32767 * max(0.0, min(volume, 1.0)))
    frames = bytearray()
    for i in range(n_samples):
        envelope = min(1.0, (n_samples - i) / fade)
        sample = int(peak * envelope * math.sin(2 * math.pi * frequency * i / SAMPLE_RATE))
        frames += struct.pack("<h", sample)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(SAMPLE_RATE)
        w.writeframes(bytes(frames))
    return buf.getvalue()
