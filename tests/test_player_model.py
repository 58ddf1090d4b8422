from types import SimpleNamespace

import numpy as np
import pytest

from sweepir.filters import FilterConfig, FilterType
from sweepir.nodes import Engine
from sweepir.player import Player
from sweepir.player_model import PlayerModel
from sweepir.sound import Sound


class FakeEqualizerModel:
    def __init__(self):
        self.range_changed = []
        self.filters = []


class FakeTicker:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


def _setup(**kwargs):
    player = Player(Engine(sample_rate=1000))
    tickers = []

    def factory(interval, callback):
        ticker = FakeTicker(interval, callback)
        tickers.append(ticker)
        return ticker

    eq = FakeEqualizerModel()
    model = PlayerModel(eq, player, ticker_factory=factory, **kwargs)
    return model, player, eq, tickers


def _sound(player):
    return Sound(player.engine, np.zeros(1000, dtype=np.float32), 1000)


def test_title_from_file_name():
    model, player, _, _ = _setup()
    events = []
    model.file_changed.append(lambda: events.append("file"))
    model.set_file("/music/song.wav", _sound(player))
    assert model.title == "song.wav"
    assert model.file == "/music/song.wav"
    assert events == ["file"]


def test_title_from_tags():
    model, player, _, _ = _setup(tag_reader=lambda f: ("Artist", "Song"))
    model.set_file("/music/x.wav", _sound(player))
    assert model.title == "Artist - Song"


def test_incomplete_tags_fall_back_to_file_name():
    model, player, _, _ = _setup(tag_reader=lambda f: ("", "Song"))
    model.set_file("/music/x.wav", _sound(player))
    assert model.title == "x.wav"


def test_set_file_without_sound_or_loader_raises():
    model, _, _, _ = _setup()
    with pytest.raises(ValueError):
        model.set_file("a.wav")


def test_supported_file_extensions():
    model, _, _, _ = _setup()
    assert model.supported_file_extensions() == ["*.wav *.flac *.mp3 "]


def test_toggle_play_pause_drives_ticker():
    model, player, _, tickers = _setup()
    model.set_file("a.wav", _sound(player))
    model.toggle_play_pause()
    assert model.is_playing
    assert tickers[0].started and tickers[0].interval == pytest.approx(0.1)
    progress = []
    model.progress_changed.append(lambda: progress.append(1))
    tickers[0].callback()
    assert progress == [1]
    model.toggle_play_pause()
    assert not model.is_playing
    assert tickers[0].cancelled


def test_progress_within_loop():
    model, player, _, _ = _setup()
    model.set_file("a.wav", _sound(player))
    model.set_end(0.6)
    model.set_begin(0.2)
    model.set_progress(0.4)
    assert model.loop_begin_time == pytest.approx(0.2)
    assert model.loop_end_time == pytest.approx(0.6)
    assert model.progress() == pytest.approx(0.5)


def test_toggle_equalizer():
    model, _, _, _ = _setup()
    assert model.is_equalizer_enabled
    model.toggle_equalizer()
    assert not model.is_equalizer_enabled


def test_filters_follow_equalizer_model():
    model, player, eq, _ = _setup()
    eq.filters = [SimpleNamespace(type=FilterType.LOW_SHELF, f=80.0, q=0.7, g=3.0)]
    for listener in eq.range_changed:
        listener()
    assert player.equalizer.filters == (
        FilterConfig(FilterType.LOW_SHELF, 80.0, 0.7, 3.0, 1000),)


def test_close_saves_and_restores_sample():
    settings = {}
    model, player, _, _ = _setup(settings=settings)
    model.set_file("/music/kept.wav", _sound(player))
    model.close()
    assert settings["sample"] == "/music/kept.wav"

    loaded = []
    player2 = Player(Engine(sample_rate=1000))

    def loader(path):
        loaded.append(path)
        return Sound(player2.engine, np.zeros(10, dtype=np.float32), 1000)

    restored = PlayerModel(FakeEqualizerModel(), player2, settings=settings, loader=loader,
                           ticker_factory=FakeTicker)
    assert loaded == ["/music/kept.wav"]
    assert restored.file == "/music/kept.wav"