"""Inverse filter for deconvolving a sine sweep."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from sweepir.generator import ExcitationSignal
from sweepir.signal import Channels


class InverseSignal:
    """A time-reversed, amplitude-weighted copy of an excitation sweep."""

    def __init__(self, data: Optional[np.ndarray] = None) -> None:
        if data is None:
            self._data = np.zeros(0, dtype=np.float32)
        else:
            self._data = np.asarray(data, dtype=np.float32).copy()

    @property
    def data(self) -> np.ndarray:
        return self._data

    def _apply_amplitude_envelope(self, offset_front: int, offset_back: int,
                                  min_f: float, max_f: float) -> None:
        length = len(self._data) - offset_front - offset_back
        if length <= 0:
            return
        factor = math.log2(max_f / min_f) / length
        self._data[offset_front:offset_front + length] *= np.power(0.5, factor * np.arange(length))


def from_excitation(excitation: ExcitationSignal) -> InverseSignal:
    """Build the inverse filter of ``excitation``."""
    samples = excitation.data
    size = len(samples) // 2
    offset = 1 if excitation.channels == Channels.RIGHT else 0
    reversed_channel = samples[offset:offset + 2 * size:2][::-1]
    inverse = InverseSignal(reversed_channel)
    inverse._apply_amplitude_envelope(excitation.samples_offset_front,
                                      excitation.samples_offset_back,
                                      excitation.min_f,
                                      excitation.max_f)
    return inverse