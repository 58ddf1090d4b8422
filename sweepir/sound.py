"""A decoded sound that plays into a node graph, with loop points."""

from __future__ import annotations

from typing import Any

import numpy as np

from sweepir.nodes import Engine, Node


class Sound(Node):
    """Frames of audio played from a cursor; attached to the engine on creation.

    Mono frames are sent to every channel of the engine. No sample rate
    conversion is done.
    """

    def __init__(self, engine: Engine, frames: Any, sample_rate: int) -> None:
        super().__init__()
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        data = np.array(frames, dtype=np.float32)
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        if data.ndim != 2 or data.shape[1] not in (1, engine.channels):
            raise ValueError(f"frames of shape {np.shape(frames)} do not fit "
                             f"{engine.channels} channel(s)")
        self._data = data
        self._channels = engine.channels
        self._sample_rate = sample_rate
        self._cursor = 0
        self._loop_begin = 0
        self._loop_end = len(data)
        self._playing = False
        self.looping = False
        self.attach(engine)

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def length(self) -> float:
        """Length in seconds."""
        return len(self._data) / self._sample_rate

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def cursor(self) -> float:
        """Play position in seconds."""
        return self._cursor / self._sample_rate

    @property
    def loop_begin(self) -> float:
        return self._loop_begin / self._sample_rate

    @property
    def loop_end(self) -> float:
        return self._loop_end / self._sample_rate

    def start(self) -> None:
        self._playing = True

    def stop(self) -> None:
        self._playing = False

    def _frames(self, seconds: float) -> int:
        if seconds < 0:
            raise ValueError("time must not be negative")
        return int(seconds * self._sample_rate)

    def _set_loop(self, begin: int, end: int) -> None:
        end = min(end, len(self._data))
        if begin > end:
            raise ValueError("loop begin must not be after loop end")
        self._loop_begin = begin
        self._loop_end = end

    def set_loop_begin(self, seconds: float) -> None:
        """Move the loop start; a cursor before it jumps to it."""
        begin = self._frames(seconds)
        self._set_loop(begin, self._loop_end)
        if self._cursor < self._loop_begin:
            self._cursor = self._loop_begin

    def set_loop_end(self, seconds: float) -> None:
        """Move the loop end; a cursor after it jumps to the loop start."""
        end = self._frames(seconds)
        self._set_loop(self._loop_begin, end)
        if self._cursor > self._loop_end:
            self._cursor = self._loop_begin

    def seek_to(self, seconds: float) -> None:
        frame = self._frames(seconds)
        if frame > len(self._data):
            raise ValueError("cannot seek past the end of the sound")
        self._cursor = frame

    def advance(self, frames: int) -> np.ndarray:
        """Play ``frames`` frames into the attached nodes and return their output."""
        if frames < 0:
            raise ValueError("frame count must not be negative")
        out = np.zeros((frames, self._channels), dtype=np.float32)
        written = 0
        while self._playing and written < frames:
            end = self._loop_end if self.looping else len(self._data)
            if self._cursor >= end:
                if self.looping and end > self._loop_begin:
                    self._cursor = self._loop_begin
                    continue
                self._playing = False
                break
            count = min(frames - written, end - self._cursor)
            out[written:written + count] = self._data[self._cursor:self._cursor + count]
            self._cursor += count
            written += count
        return self.render(out)