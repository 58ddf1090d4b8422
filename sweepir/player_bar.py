"""View model of the bar that shows either the player or the sweep settings."""

from __future__ import annotations

from typing import Any, Callable

MS_PER_DAY = 24 * 60 * 60 * 1000


def format_mm_ss(seconds: float) -> str:
    """Format a time of day given in seconds as minutes and seconds.

    Times outside one day give an empty string.
    """
    ms = int(seconds * 1000)
    if not 0 <= ms < MS_PER_DAY:
        return ""
    total = ms // 1000
    return f"{total // 60 % 60:02d}:{total % 60:02d}"


class PlayerBarModel:
    """Shows the loop range while playing, otherwise the sweep frequency range."""

    def __init__(self, measure_model: Any, player_model: Any) -> None:
        self._measure = measure_model
        self._player = player_model
        self.state_changed: list[Callable[[], None]] = []
        measure_model.measure_state_changed.append(self._forward)
        measure_model.range_changed.append(self._forward)
        player_model.status_changed.append(self._forward)

    def _forward(self) -> None:
        for listener in list(self.state_changed):
            listener()

    @property
    def is_playing(self) -> bool:
        return self._player.is_playing

    @property
    def is_measuring(self) -> bool:
        return self._measure.is_measuring

    def left_readout(self) -> str:
        if self.is_playing:
            return format_mm_ss(self._player.loop_begin_time)
        return self._measure.min_frequency_readout()

    def right_readout(self) -> str:
        if self.is_playing:
            return format_mm_ss(self._player.loop_end_time)
        return self._measure.max_frequency_readout()

    def title(self) -> str:
        if self.is_playing:
            return self._player.title
        return "Sine sweep"

    def toggle_play_pause(self) -> None:
        self._player.toggle_play_pause()

    def toggle_measure(self) -> None:
        self._measure.on_measure_button_clicked()