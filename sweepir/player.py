"""Audio file player with loop points and an equalizer in the signal path."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from sweepir.equalizer import Equalizer
from sweepir.filters import FilterConfig, FilterType
from sweepir.nodes import Engine
from sweepir.sound import Sound

SUPPORTED_FILE_EXTENSIONS = ("wav", "flac", "mp3")


class PlayerInterface(ABC):
    """What a player offers to the user interface.

    ``loop_begin_time``, ``loop_end_time`` and ``progress_time`` are settable.
    """

    @property
    @abstractmethod
    def supported_file_extensions(self) -> list[str]: ...

    @abstractmethod
    def set_file(self, file: str, sound: Sound) -> bool: ...

    @abstractmethod
    def set_output_device(self, output: str) -> None: ...

    @property
    @abstractmethod
    def is_playing(self) -> bool: ...

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @property
    @abstractmethod
    def loop_begin_time(self) -> float: ...

    @property
    @abstractmethod
    def loop_end_time(self) -> float: ...

    @property
    @abstractmethod
    def progress_time(self) -> float: ...

    @property
    @abstractmethod
    def total_time(self) -> float: ...

    @abstractmethod
    def set_filters(self, filters: Iterable[Any]) -> None: ...

    @abstractmethod
    def set_equalizer_enabled(self, enable: bool) -> None: ...

    @property
    @abstractmethod
    def is_equalizer_enabled(self) -> bool: ...


def _to_filter_type(value: Any) -> FilterType:
    if isinstance(value, FilterType):
        return value
    if isinstance(value, str):
        try:
            return FilterType[value.upper()]
        except KeyError:
            return FilterType.NONE
    return FilterType.NONE


class Player(PlayerInterface):
    """Plays one looping sound through an equalizer into an engine."""

    def __init__(self, engine: Optional[Engine] = None,
                 output_devices: Sequence[str] = (),
                 input_devices: Sequence[str] = ()) -> None:
        self._engine = engine if engine is not None else Engine()
        self._equalizer = Equalizer(self._engine)
        self._output_devices = list(output_devices)
        self._input_devices = list(input_devices)
        self._output_device = ""
        self._file = ""
        self._equalizer_enabled = True
        self._sound = Sound(self._engine, np.zeros(0, dtype=np.float32),
                            self._engine.sample_rate)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def equalizer(self) -> Equalizer:
        return self._equalizer

    @property
    def sound(self) -> Sound:
        return self._sound

    @property
    def file(self) -> str:
        return self._file

    @property
    def output_devices(self) -> list[str]:
        return list(self._output_devices)

    @property
    def input_devices(self) -> list[str]:
        return list(self._input_devices)

    @property
    def output_device(self) -> str:
        return self._output_device

    @property
    def supported_file_extensions(self) -> list[str]:
        return list(SUPPORTED_FILE_EXTENSIONS)

    def set_file(self, file: str, sound: Sound) -> bool:
        """Play ``sound``, decoded from ``file``, in a loop through the equalizer."""
        self._file = file
        self._sound = sound
        sound.looping = True
        sound.attach(self._equalizer)
        self._equalizer.attach(self._engine)
        return True

    def set_output_device(self, output: str) -> None:
        self._output_device = output

    @property
    def is_playing(self) -> bool:
        return self._sound.is_playing

    def start(self) -> None:
        self._sound.start()

    def stop(self) -> None:
        self._sound.stop()

    @property
    def loop_begin_time(self) -> float:
        return self._sound.loop_begin

    @loop_begin_time.setter
    def loop_begin_time(self, value: float) -> None:
        self._sound.set_loop_begin(value)

    @property
    def loop_end_time(self) -> float:
        return self._sound.loop_end

    @loop_end_time.setter
    def loop_end_time(self, value: float) -> None:
        self._sound.set_loop_end(value)

    @property
    def progress_time(self) -> float:
        return self._sound.cursor

    @progress_time.setter
    def progress_time(self, value: float) -> None:
        self._sound.seek_to(value)

    @property
    def total_time(self) -> float:
        return self._sound.length

    def set_filters(self, filters: Iterable[Any]) -> None:
        """Configure the equalizer from objects with ``type``, ``f``, ``q`` and ``g``."""
        configs = [FilterConfig(_to_filter_type(f.type), f.f, f.q, f.g,
                                self._engine.sample_rate)
                   for f in filters]
        self._equalizer.set_filters(configs)

    def set_equalizer_enabled(self, enable: bool) -> None:
        """Route the sound through the equalizer, or straight to the engine."""
        self._equalizer_enabled = bool(enable)
        if self._sound is None:
            return
        if self._equalizer_enabled:
            self._sound.attach(self._equalizer)
            self._equalizer.attach(self._engine)
        else:
            self._sound.attach(self._engine)

    @property
    def is_equalizer_enabled(self) -> bool:
        return self._equalizer_enabled