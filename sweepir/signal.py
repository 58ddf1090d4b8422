"""Signals backed by an audio buffer."""

from __future__ import annotations

from enum import IntEnum
from math import gcd

import numpy as np
from scipy.signal import resample_poly

from sweepir.buffer import AudioBuffer


class Channels(IntEnum):
    LEFT = 0
    RIGHT = 1
    STEREO = 2


class Signal:
    """A view of an :class:`AudioBuffer` with a sample rate and channel layout."""

    def __init__(self, buffer: AudioBuffer, channels: Channels = Channels.LEFT,
                 sample_rate: int = 0) -> None:
        self.buffer = buffer
        self.channels = Channels(channels)
        self._sample_rate = sample_rate

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def data(self) -> np.ndarray:
        return self.buffer.data

    def resample(self, sample_rate: int) -> None:
        """Convert the buffer's samples to ``sample_rate``."""
        if sample_rate == self._sample_rate:
            return
        if self._sample_rate <= 0 or sample_rate <= 0:
            raise ValueError("sample rates must be positive")

        old = self.buffer.data
        length = int(len(old) * sample_rate / self._sample_rate)
        if len(old) == 0:
            converted = np.zeros(0, dtype=np.float32)
        else:
            divisor = gcd(sample_rate, self._sample_rate)
            out = resample_poly(old.astype(np.float64),
                                sample_rate // divisor,
                                self._sample_rate // divisor)
            if len(out) < length:
                out = np.concatenate((out, np.zeros(length - len(out))))
            converted = out[:length].astype(np.float32)

        self.buffer.data = converted
        self._sample_rate = sample_rate


class ResponseSignal(Signal):
    """A recorded mono signal."""

    def __init__(self, buffer: AudioBuffer, sample_rate: int) -> None:
        super().__init__(buffer, sample_rate=sample_rate)