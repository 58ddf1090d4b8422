"""Exponential sine sweep generation, fades and level shaping."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from sweepir.buffer import AudioBuffer
from sweepir.signal import Channels, Signal


class WindowFunction(Enum):
    HANN = 0


def _hann(indices: np.ndarray, k: int) -> np.ndarray:
    factor = 2.0 * math.pi / (2 * k + 1)
    return 0.5 * (1.0 - np.cos(factor * indices))


class ExcitationSignal(Signal):
    """A stereo excitation signal with silent offsets before and after the sweep."""

    def __init__(self, buffer: AudioBuffer, *, channels: Channels = Channels.LEFT,
                 sample_rate: int = 0, min_f: float = 20.0, max_f: float = 20000.0,
                 samples_per_octave: int = 0, samples_offset_front: int = 0,
                 samples_offset_back: int = 0) -> None:
        super().__init__(buffer, channels=channels, sample_rate=sample_rate)
        self._min_f = min_f
        self._max_f = max_f
        self._samples_per_octave = samples_per_octave
        self._samples_offset_front = samples_offset_front
        self._samples_offset_back = samples_offset_back
        self._volume = 0

    @property
    def volume(self) -> int:
        return self._volume

    @property
    def min_f(self) -> float:
        return self._min_f

    @property
    def max_f(self) -> float:
        return self._max_f

    @property
    def samples_per_octave(self) -> int:
        return self._samples_per_octave

    @property
    def samples_offset_front(self) -> int:
        return self._samples_offset_front

    @property
    def samples_offset_back(self) -> int:
        return self._samples_offset_back

    def set_volume(self, level_db: int) -> None:
        """Scale all samples by ``level_db`` decibels."""
        if level_db != self._volume:
            self.buffer.data *= 10.0 ** (level_db / 20.0)

    def fade_in(self, k: int) -> None:
        """Apply a rising Hann half-window over ``k + 1`` frames after the front offset."""
        start = self._samples_offset_front * 2
        stop = start + 2 * (k + 1)
        if k < 0 or stop > len(self.buffer.data):
            raise ValueError("fade-in does not fit in the signal")
        frames = self.buffer.data[start:stop].reshape(-1, 2)
        frames *= _hann(np.arange(k + 1), k)[:, None]

    def fade_out(self, k: int) -> None:
        """Apply a falling Hann half-window over ``k`` frames before the back offset."""
        stop = len(self.buffer.data) - self._samples_offset_back * 2
        start = stop - 2 * k
        if k < 0 or start < 0:
            raise ValueError("fade-out does not fit in the signal")
        frames = self.buffer.data[start:stop].reshape(-1, 2)
        frames *= _hann(np.arange(k + 1, 2 * k + 1), k)[:, None]


def _sweep(length: int, sample_rate: int, f_min: float, f_max: float) -> np.ndarray:
    if length <= 0:
        return np.zeros(0)
    f_range_ln = math.log(f_max / f_min)
    if f_range_ln == 0.0:
        raise ValueError("f_max must differ from f_min")
    duration = length / sample_rate
    k = 2.0 * math.pi * f_min * duration / f_range_ln
    return np.sin(k * (np.exp(np.arange(length) / (length / f_range_ln)) - 1.0))


def sine_sweep(data: np.ndarray, channels: Channels, sample_rate: int,
               f_min: float, f_max: float) -> np.ndarray:
    """Fill interleaved ``data`` in place with a sweep on the left channel."""
    length = len(data) // 2
    data[0:2 * length:2] = _sweep(length, sample_rate, f_min, f_max)
    data[1:2 * length:2] = 0.0
    return data


def create_sine_sweep(buffer: AudioBuffer, channels: Channels, sample_rate: int,
                      f_min: float, f_max: float, samples_per_octave: int,
                      samples_offset_front: int = 0,
                      samples_offset_back: int = 0) -> ExcitationSignal:
    """Fill ``buffer`` with a stereo exponential sweep and describe it."""
    length = int(math.log2(f_max / f_min) * samples_per_octave)
    total = length + samples_offset_front + samples_offset_back
    if length < 0 or total < 0:
        raise ValueError("sweep length must not be negative")

    signal = ExcitationSignal(buffer, sample_rate=sample_rate, min_f=f_min, max_f=f_max,
                              samples_per_octave=samples_per_octave,
                              samples_offset_front=samples_offset_front,
                              samples_offset_back=samples_offset_back)
    data = np.zeros(2 * total, dtype=np.float32)
    values = _sweep(length, sample_rate, f_min, f_max)
    frames = data[2 * samples_offset_front:2 * (samples_offset_front + length)].reshape(-1, 2)
    if channels in (Channels.LEFT, Channels.STEREO):
        frames[:, 0] = values
    if channels in (Channels.RIGHT, Channels.STEREO):
        frames[:, 1] = values
    buffer.data = data
    return signal


def window(data: np.ndarray, channels: Channels, function: WindowFunction, k: int) -> np.ndarray:
    """Fade both ends of the left channel of interleaved ``data`` in place."""
    if k < 0 or 2 * k > len(data):
        raise ValueError("window does not fit in the data")
    data[0:2 * k:2] *= _hann(np.arange(k), k)
    tail = len(data) - 2 * k
    data[tail:tail + 2 * k:2] *= _hann(np.arange(k + 1, 2 * k + 1), k)
    return data


def fade_in(data: np.ndarray, channels: Channels, function: WindowFunction, k: int) -> np.ndarray:
    """Fade in the left channel of interleaved ``data`` over ``k + 1`` frames, in place."""
    if k < 0 or 2 * k + 1 > len(data):
        raise ValueError("fade-in does not fit in the data")
    data[0:2 * (k + 1):2] *= _hann(np.arange(k + 1), k)
    return data


def fade_out(data: np.ndarray, channels: Channels, function: WindowFunction, k: int) -> np.ndarray:
    """Fade out the left channel of interleaved ``data`` over ``k`` frames, in place."""
    if k < 0 or 2 * k > len(data):
        raise ValueError("fade-out does not fit in the data")
    tail = len(data) - 2 * k
    data[tail:tail + 2 * k:2] *= _hann(np.arange(k + 1, 2 * k + 1), k)
    return data


def volume(data: np.ndarray, channels: Channels, level_db: int) -> np.ndarray:
    """Scale the left channel of interleaved ``data`` by ``level_db`` decibels, in place."""
    if level_db != 0:
        length = len(data) // 2
        data[0:2 * length:2] *= 10.0 ** (level_db / 20.0)
    return data


def volume_envelope(data: np.ndarray, f_min: float, f_max: float) -> np.ndarray:
    """Attenuate ``data`` in place by 3 dB per octave of the sweep, for pink weighting."""
    length = len(data)
    if length == 0:
        return data
    factor = math.log2(f_max / f_min) / length
    data *= np.power(0.5, factor * np.arange(length))
    return data