import numpy as np

from sweepir.nodes import Engine
from sweepir.player import Player
from sweepir.player_bar import PlayerBarModel, format_mm_ss
from sweepir.player_model import PlayerModel
from sweepir.sound import Sound


class FakeMeasureModel:
    def __init__(self):
        self.measure_state_changed = []
        self.range_changed = []
        self.is_measuring = False
        self.clicks = 0

    def min_frequency_readout(self):
        return "low"

    def max_frequency_readout(self):
        return "high"

    def on_measure_button_clicked(self):
        self.clicks += 1
        self.is_measuring = not self.is_measuring


class FakeEqualizerModel:
    def __init__(self):
        self.range_changed = []
        self.filters = []


class FakeTicker:
    def __init__(self, interval, callback):
        pass

    def start(self):
        pass

    def cancel(self):
        pass


def _setup():
    player = Player(Engine(sample_rate=1000))
    player_model = PlayerModel(FakeEqualizerModel(), player, ticker_factory=FakeTicker)
    sound = Sound(player.engine, np.zeros(200000, dtype=np.float32), 1000)
    player_model.set_file("/music/track.wav", sound)
    measure = FakeMeasureModel()
    return PlayerBarModel(measure, player_model), player_model, measure


def test_format_mm_ss():
    assert format_mm_ss(0) == "00:00"
    assert format_mm_ss(75.0) == "01:15"
    assert format_mm_ss(3725) == "02:05"
    assert format_mm_ss(-1) == ""


def test_idle_shows_sweep():
    bar, _, _ = _setup()
    assert not bar.is_playing
    assert bar.left_readout() == "low"
    assert bar.right_readout() == "high"
    assert bar.title() == "Sine sweep"


def test_playing_shows_loop():
    bar, player_model, _ = _setup()
    player_model.set_end(150.0)
    player_model.set_begin(75.0)
    bar.toggle_play_pause()
    assert bar.is_playing
    assert bar.left_readout() == format_mm_ss(75.0)
    assert bar.right_readout() == format_mm_ss(150.0)
    assert bar.title() == "track.wav"


def test_toggle_measure():
    bar, _, measure = _setup()
    bar.toggle_measure()
    assert measure.clicks == 1
    assert bar.is_measuring


def test_state_changes_are_forwarded():
    bar, player_model, measure = _setup()
    events = []
    bar.state_changed.append(lambda: events.append(1))
    for listener in measure.measure_state_changed + measure.range_changed:
        listener()
    player_model.toggle_equalizer()
    assert len(events) == 3