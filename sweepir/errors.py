"""Human-readable descriptions of audio device errors."""

from __future__ import annotations

from enum import IntEnum


class AudioError(IntEnum):
    NO_ERROR = 0
    OPEN_ERROR = 1
    IO_ERROR = 2
    UNDERRUN_ERROR = 3
    FATAL_ERROR = 4


_UNDERRUN_DESCRIPTION = (
    "The audio output ran out of signal buffers while measuring. This can "
    "occur in heavy load situations and/or when the same device is used for "
    "audio input and output. Most audio applications can recover from this. "
    "However, this is clearly not desired when doing acoustic measurements."
)


def error_to_string(error: AudioError) -> tuple[str, str]:
    """Return a short message and a description for ``error``; empty when not reported."""
    if error == AudioError.UNDERRUN_ERROR:
        return "Buffer underrun detected", _UNDERRUN_DESCRIPTION
    return "", ""