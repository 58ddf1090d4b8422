"""Impulse response measurement by exponential sine sweep deconvolution."""

from __future__ import annotations

from typing import Any

import numpy as np

from sweepir.buffer import AudioBuffer
from sweepir.generator import ExcitationSignal, create_sine_sweep
from sweepir.inverse import InverseSignal, from_excitation
from sweepir.signal import Channels


class _Setting:
    """A measurement parameter; changing it marks the owner as dirty."""

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr = "_" + name

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self._attr)

    def __set__(self, obj: Any, value: Any) -> None:
        if getattr(obj, self._attr) != value:
            setattr(obj, self._attr, value)
            obj._dirty = True


def compute_ir(measured_signal: Any, inverse_signal: Any) -> np.ndarray:
    """Convolve a recording with an inverse filter, giving the impulse response."""
    measured = np.asarray(measured_signal, dtype=np.float32).ravel()
    inverse = np.asarray(inverse_signal, dtype=np.float32).ravel()
    length = max(len(measured), len(inverse)) * 2
    if length == 0:
        return np.zeros(0, dtype=np.float32)
    product = np.fft.fft(measured, length) * np.fft.fft(inverse, length)
    return np.fft.ifft(product).real.astype(np.float32)


class Farina:
    """Generates the excitation sweep and deconvolves recordings of it."""

    channels = _Setting()
    sample_rate = _Setting()
    begin_frequency = _Setting()
    end_frequency = _Setting()
    duration_per_octave = _Setting()
    level = _Setting()

    def __init__(self, output_buffer: AudioBuffer) -> None:
        self._output_buffer = output_buffer
        self._excitation = ExcitationSignal(output_buffer)
        self._inverse = InverseSignal()
        self._ir = np.zeros(0, dtype=np.float32)
        self._dirty = True
        self._channels = Channels.LEFT
        self._sample_rate = 44100
        self._begin_frequency = 20.0
        self._end_frequency = 20000.0
        self._duration_per_octave = 44100
        self._level = -6

    @property
    def inverse_signal(self) -> InverseSignal:
        return self._inverse

    def excitation_signal(self) -> ExcitationSignal:
        """Return the excitation sweep, regenerating it if the parameters differ."""
        samples_per_octave = self._duration_per_octave / 1000.0 * self._sample_rate
        current = self._excitation
        if (current.samples_per_octave != samples_per_octave
                or current.channels != self._channels
                or current.volume != self._level
                or current.min_f != self._begin_frequency
                or current.max_f != self._end_frequency):
            # Fade in over one octave, fade out over 1/24 octave.
            excitation = create_sine_sweep(self._output_buffer,
                                           self._channels,
                                           self._sample_rate,
                                           self._begin_frequency,
                                           self._end_frequency,
                                           int(samples_per_octave),
                                           self._sample_rate,
                                           self._sample_rate)
            excitation.fade_in(self._duration_per_octave * self._sample_rate // 1000)
            excitation.fade_out(self._duration_per_octave * self._sample_rate // 24000)
            self._inverse = from_excitation(excitation)
            excitation.set_volume(self._level)
            self._excitation = excitation
        return self._excitation

    def impulse_response(self, measured_signal: Any) -> np.ndarray:
        """Deconvolve ``measured_signal`` with the current inverse filter."""
        self._ir = compute_ir(measured_signal, self._inverse.data)
        return self._ir