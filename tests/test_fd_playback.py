"""Tests for the playback cursor."""

import pytest

from floyd.fd_playback import PlaybackState


@pytest.fixture
def state():
    playback = PlaybackState()
    playback.load(4)
    return playback


class TestNavigation:
    def test_load_resets(self, state):
        state.current_step = 2
        state.playing = True
        state.load(6)
        assert (state.total_steps, state.current_step, state.playing) == (6, 0, False)

    def test_next_and_prev_clamp(self, state):
        assert not state.prev()
        assert state.next() and state.next() and state.next()
        assert state.current_step == 3
        assert state.at_end
        assert not state.next()
        assert state.prev()
        assert state.current_step == 2

    def test_seek(self, state):
        state.seek(3)
        assert state.current_step == 3
        with pytest.raises(IndexError):
            state.seek(4)
        with pytest.raises(IndexError):
            state.seek(-1)

    def test_reset_stops_playing(self, state):
        state.play()
        state.next()
        state.reset()
        assert state.current_step == 0
        assert not state.playing

    def test_empty_sequence(self):
        playback = PlaybackState()
        assert playback.at_end and playback.at_start
        assert not playback.play()
        assert not playback.next()


class TestPlaying:
    def test_tick_runs_to_the_end(self, state):
        assert state.play()
        ticks = 0
        while state.tick():
            ticks += 1
        assert ticks == 3
        assert state.current_step == 3
        assert not state.playing

    def test_tick_does_nothing_when_paused(self, state):
        assert not state.tick()
        assert state.current_step == 0

    def test_play_from_end_restarts(self, state):
        state.seek(3)
        state.play()
        assert state.current_step == 0
        assert state.playing

    def test_toggle(self, state):
        assert state.toggle()
        assert not state.toggle()


class TestSpeed:
    def test_interval_scales_with_speed(self, state):
        assert state.interval_ms == 1500
        state.set_speed(2.0)
        assert state.interval_ms == 750

    def test_speed_is_clamped(self, state):
        state.set_speed(10)
        assert state.speed == 3.0
        state.set_speed(0.1)
        assert state.speed == 0.5
