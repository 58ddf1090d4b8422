"""View model of the audio file player."""

from __future__ import annotations

import threading
from typing import Any, Callable, MutableMapping, Optional

from sweepir.player import Player
from sweepir.sound import Sound

SAMPLE_KEY = "sample"
PROGRESS_INTERVAL_S = 0.1

SoundLoader = Callable[[str], Sound]
TagReader = Callable[[str], Optional[tuple[str, str]]]
TickerFactory = Callable[[float, Callable[[], None]], Any]


class _RepeatingTimer:
    """Calls ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()

    def start(self) -> None:
        thread = threading.Thread(target=self._run, daemon=True)
        thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._callback()

    def cancel(self) -> None:
        self._stopped.set()


def _emit(listeners: list[Callable[[], None]]) -> None:
    for listener in list(listeners):
        listener()


class PlayerModel:
    """Play controls, loop range and title of the current sample.

    ``equalizer_model`` has a ``range_changed`` list of listeners and a
    ``filters`` sequence of objects with ``type``, ``f``, ``q`` and ``g``.
    """

    def __init__(self, equalizer_model: Any, player: Optional[Player] = None,
                 settings: Optional[MutableMapping[str, str]] = None,
                 loader: Optional[SoundLoader] = None,
                 tag_reader: Optional[TagReader] = None,
                 ticker_factory: TickerFactory = _RepeatingTimer) -> None:
        self._equalizer_model = equalizer_model
        self._player = player if player is not None else Player()
        self._settings = settings if settings is not None else {}
        self._loader = loader
        self._tag_reader = tag_reader
        self._ticker_factory = ticker_factory
        self._ticker: Optional[Any] = None
        self._file = ""
        self._title = ""
        self.status_changed: list[Callable[[], None]] = []
        self.progress_changed: list[Callable[[], None]] = []
        self.file_changed: list[Callable[[], None]] = []

        equalizer_model.range_changed.append(self._on_filters_changed)

        sample = self._settings.get(SAMPLE_KEY, "")
        if sample and loader is not None:
            self.set_file(sample)

    @property
    def player(self) -> Player:
        return self._player

    @property
    def file(self) -> str:
        return self._file

    @property
    def title(self) -> str:
        return self._title

    @property
    def is_playing(self) -> bool:
        return self._player.is_playing

    @property
    def loop_begin_time(self) -> float:
        return self._player.loop_begin_time

    @property
    def loop_end_time(self) -> float:
        return self._player.loop_end_time

    @property
    def total_time(self) -> float:
        return self._player.total_time

    @property
    def is_equalizer_enabled(self) -> bool:
        return self._player.is_equalizer_enabled

    def supported_file_extensions(self) -> list[str]:
        """File dialog patterns, all in one entry."""
        pattern = "".join(f"*.{ext} " for ext in self._player.supported_file_extensions)
        return [pattern]

    def progress(self) -> float:
        """Position within the loop range, from 0 at its start to 1 at its end."""
        begin = self._player.loop_begin_time
        span = self._player.loop_end_time - begin
        if span == 0:
            return 0.0
        return (self._player.progress_time - begin) / span

    def _make_title(self, file: str) -> str:
        tags = self._tag_reader(file) if self._tag_reader is not None else None
        if tags:
            artist, title = tags
            if artist and title:
                return f"{artist} - {title}"
        return file[file.rfind("/") + 1:]

    def set_file(self, file: str, sound: Optional[Sound] = None) -> None:
        """Play ``file``; its sound is decoded with the loader unless given."""
        if sound is None:
            if self._loader is None:
                raise ValueError(f"no sound given for {file!r} and no loader set")
            sound = self._loader(file)
        self._title = self._make_title(file)
        if self._player.set_file(file, sound):
            self._file = file
            _emit(self.file_changed)
            _emit(self.status_changed)

    def set_device(self, output: str) -> None:
        self._player.set_output_device(output)

    def toggle_play_pause(self) -> None:
        if self._player.is_playing:
            self._player.stop()
            if self._ticker is not None:
                self._ticker.cancel()
                self._ticker = None
        else:
            self._player.start()
            self._ticker = self._ticker_factory(PROGRESS_INTERVAL_S,
                                                lambda: _emit(self.progress_changed))
            self._ticker.start()
        _emit(self.status_changed)
        _emit(self.progress_changed)

    def set_begin(self, value: float) -> None:
        self._player.loop_begin_time = value
        _emit(self.status_changed)
        _emit(self.progress_changed)

    def set_end(self, value: float) -> None:
        self._player.loop_end_time = value
        _emit(self.status_changed)
        _emit(self.progress_changed)

    def toggle_equalizer(self) -> None:
        self._player.set_equalizer_enabled(not self._player.is_equalizer_enabled)
        _emit(self.status_changed)

    def set_progress(self, value: float) -> None:
        self._player.progress_time = value
        _emit(self.progress_changed)

    def close(self) -> None:
        """Stop the progress ticker and remember the current sample."""
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self._settings[SAMPLE_KEY] = self._file

    def _on_filters_changed(self) -> None:
        self._player.set_filters(list(self._equalizer_model.filters))