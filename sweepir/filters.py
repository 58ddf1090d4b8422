"""Biquad filter settings, coefficients and the filter node."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

import numpy as np
from scipy.signal import lfilter

from sweepir.nodes import Node, NodeGraph


class StandardSampleRate(IntEnum):
    """Standard sample rates in priority order."""

    RATE_48000 = 48000
    RATE_44100 = 44100
    RATE_32000 = 32000
    RATE_24000 = 24000
    RATE_22050 = 22050
    RATE_88200 = 88200
    RATE_96000 = 96000
    RATE_176400 = 176400
    RATE_192000 = 192000
    RATE_16000 = 16000
    RATE_11025 = 11250
    RATE_8000 = 8000
    RATE_352800 = 352800
    RATE_384000 = 384000
    RATE_MIN = 8000
    RATE_MAX = 384000
    RATE_COUNT = 14


class FilterType(Enum):
    NONE = 0
    PEAK = 1
    LOW_PASS = 2
    HIGH_PASS = 3
    LOW_SHELF = 4
    HIGH_SHELF = 5


@dataclass(frozen=True)
class FilterConfig:
    """Settings of one biquad filter."""

    type: FilterType = FilterType.NONE
    freq: float = 0.0
    q: float = 0.0
    gain: float = 0.0
    sample_rate: int = StandardSampleRate.RATE_48000


@dataclass(frozen=True)
class BiquadCoefficients:
    """Normalised biquad coefficients (a0 == 1)."""

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float

    @property
    def numerator(self) -> tuple[float, float, float]:
        return (self.b0, self.b1, self.b2)

    @property
    def denominator(self) -> tuple[float, float, float]:
        return (1.0, self.a1, self.a2)


def _f32(value: float) -> float:
    return float(np.float32(value))


def biquad_coefficients(config: FilterConfig) -> BiquadCoefficients:
    """Compute the coefficients for ``config``, rounded to single precision."""
    kind = FilterType(config.type)
    if kind is FilterType.NONE:
        return BiquadCoefficients(1.0, 0.0, 0.0, 0.0, 0.0)
    if config.q <= 0:
        raise ValueError("filter quality must be positive")
    if config.sample_rate <= 0:
        raise ValueError("sample rate must be positive")

    w0 = 2.0 * math.pi * config.freq / float(config.sample_rate)
    cos_w0 = math.cos(w0)
    alpha = math.sin(w0) * 0.5 / config.q

    if kind is FilterType.PEAK:
        a = 10.0 ** (config.gain / 40.0)
        alpha1 = alpha * a
        alpha2 = alpha / a
        a0 = 1.0 + alpha2
        b0 = (1.0 + alpha1) / a0
        b1 = (-2.0 * cos_w0) / a0
        b2 = (1.0 - alpha1) / a0
        a1 = b1
        a2 = (1.0 - alpha2) / a0
    elif kind is FilterType.LOW_PASS:
        a0 = 1.0 + alpha
        b1 = _f32((1.0 - cos_w0) / a0)
        b0 = _f32(b1 * 0.5)
        b2 = b0
        a1 = (-2.0 * cos_w0) / a0
        a2 = (1.0 - alpha) / a0
    elif kind is FilterType.HIGH_PASS:
        a0 = 1.0 + alpha
        b1 = _f32(-(1.0 + cos_w0) / a0)
        b0 = _f32(b1 * -0.5)
        b2 = b0
        a1 = (-2.0 * cos_w0) / a0
        a2 = (1.0 - alpha) / a0
    elif kind is FilterType.LOW_SHELF:
        a = 10.0 ** (config.gain / 40.0)
        alpha2 = 2.0 * math.sqrt(a) * alpha
        a0 = (a + 1) + (a - 1) * cos_w0 + alpha2
        b0 = (a * ((a + 1) - (a - 1) * cos_w0 + alpha2)) / a0
        b1 = (2 * a * ((a - 1) - (a + 1) * cos_w0)) / a0
        b2 = (a * ((a + 1) - (a - 1) * cos_w0 - alpha2)) / a0
        a1 = (-2 * ((a - 1) + (a + 1) * cos_w0)) / a0
        a2 = ((a + 1) + (a - 1) * cos_w0 - alpha2) / a0
    else:
        a = 10.0 ** (config.gain / 40.0)
        alpha2 = 2.0 * math.sqrt(a) * alpha
        a0 = (a + 1) - (a - 1) * cos_w0 + alpha2
        b0 = (a * ((a + 1) + (a - 1) * cos_w0 + alpha2)) / a0
        b1 = (-2 * a * ((a - 1) + (a + 1) * cos_w0)) / a0
        b2 = (a * ((a + 1) + (a - 1) * cos_w0 - alpha2)) / a0
        a1 = (2 * ((a - 1) - (a + 1) * cos_w0)) / a0
        a2 = ((a + 1) - (a - 1) * cos_w0 - alpha2) / a0

    return BiquadCoefficients(_f32(b0), _f32(b1), _f32(b2), _f32(a1), _f32(a2))


class FilterNode(Node):
    """A biquad filter applied independently to each channel of the graph."""

    def __init__(self, node_graph: NodeGraph, config: Optional[FilterConfig] = None) -> None:
        super().__init__()
        self._channels = node_graph.channels
        self._config = config if config is not None else FilterConfig()
        self._coefficients = biquad_coefficients(self._config)
        self._state = np.zeros((2, self._channels))

    @property
    def config(self) -> FilterConfig:
        return self._config

    @property
    def coefficients(self) -> BiquadCoefficients:
        return self._coefficients

    def assign(self, config: FilterConfig) -> "FilterNode":
        """Use ``config``; coefficients are recomputed only if it differs."""
        if config != self._config:
            coefficients = biquad_coefficients(config)
            self._config = config
            self._coefficients = coefficients
        return self

    def process(self, samples: Any) -> np.ndarray:
        """Filter a block of ``(frames, channels)`` samples, keeping state between blocks."""
        x = np.asarray(samples, dtype=np.float64)
        mono = x.ndim == 1
        if mono:
            x = x.reshape(-1, 1)
        if x.ndim != 2 or x.shape[1] != self._channels:
            raise ValueError(f"expected {self._channels} channel(s), got shape {np.shape(samples)}")
        if x.shape[0] == 0:
            y = x.astype(np.float32)
        else:
            c = self._coefficients
            y, self._state = lfilter(c.numerator, c.denominator, x, axis=0, zi=self._state)
            y = y.astype(np.float32)
        return y.ravel() if mono else y