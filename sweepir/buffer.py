"""In-memory audio buffer streaming interleaved 32-bit float samples."""

from __future__ import annotations

import math
from enum import Flag
from typing import Callable, Optional

import numpy as np

_WIRE_SAMPLE = np.dtype("<f4")
_SAMPLE_BYTES = _WIRE_SAMPLE.itemsize


class OpenMode(Flag):
    """Direction in which an :class:`AudioBuffer` may be used."""

    READ_ONLY = 1
    WRITE_ONLY = 2
    READ_WRITE = READ_ONLY | WRITE_ONLY


def _check_aligned(byte_count: int) -> None:
    if byte_count < 0:
        raise ValueError("byte count must not be negative")
    if byte_count % _SAMPLE_BYTES:
        raise ValueError(f"byte count {byte_count} is not a multiple of {_SAMPLE_BYTES}")


class AudioBuffer:
    """A seekable buffer of float samples, read and written as little-endian bytes.

    ``on_ran_empty`` is called whenever a read finds no samples left.
    """

    def __init__(self, mode: OpenMode, on_ran_empty: Optional[Callable[[], None]] = None) -> None:
        self.mode = OpenMode(mode)
        self.data = np.zeros(0, dtype=np.float32)
        self.on_ran_empty = on_ran_empty
        self._pos = 0
        self._peak = 0.0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def start(self) -> None:
        """Rewind to the first sample and open the buffer."""
        self._pos = 0
        self._open = True

    def stop(self) -> None:
        """Close the buffer."""
        self._open = False

    def level(self) -> float:
        """Return the peak level in dBFS since the last call, then reset it."""
        peak = self._peak
        self._peak = 0.0
        return 20.0 * math.log10(peak) if peak > 0.0 else -math.inf

    def _require(self, needed: OpenMode, purpose: str) -> None:
        if not self._open or not (self.mode & needed):
            raise ValueError(f"buffer is not open for {purpose}")

    def read(self, max_bytes: int) -> bytes:
        """Read up to ``max_bytes`` bytes of samples from the current position."""
        self._require(OpenMode.READ_ONLY, "reading")
        _check_aligned(max_bytes)
        available = max(len(self.data) - self._pos, 0) * _SAMPLE_BYTES
        count = min(max_bytes, available) // _SAMPLE_BYTES
        chunk = self.data[self._pos:self._pos + count].astype(_WIRE_SAMPLE).tobytes()
        self._pos += count
        if not chunk and self.on_ran_empty is not None:
            self.on_ran_empty()
        return chunk

    def write(self, payload: bytes) -> int:
        """Write samples at the current position, dropping anything after them.

        Returns the number of bytes written.
        """
        self._require(OpenMode.WRITE_ONLY, "writing")
        view = memoryview(payload).cast("B")
        _check_aligned(len(view))
        samples = np.frombuffer(view, dtype=_WIRE_SAMPLE).astype(np.float32)
        head = self.data[:self._pos]
        if len(head) < self._pos:
            head = np.concatenate((head, np.zeros(self._pos - len(head), dtype=np.float32)))
        self.data = np.concatenate((head, samples)).astype(np.float32)
        if samples.size:
            self._peak = max(self._peak, float(np.max(np.abs(samples))))
        self._pos += samples.size
        return len(view)