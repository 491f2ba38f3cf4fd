"""
Tests for the AnimationEngine state machine (real thread, fake terminal)
"""

import time
from itertools import islice

import pytest

from animations.perimeter import PositionGenerator
from engine.animation_engine import AnimationEngine
from fakes import WAIT_TIMEOUT
from models.enums import EngineState
from models.signals import NewMessage, Pause, Resume, Stop
from services.signal_channel import SignalChannel

FAST_FRAME = 0.001


def wait_until(predicate, timeout=WAIT_TIMEOUT):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("Condition not reached in time")
        time.sleep(0.001)


@pytest.fixture
def channel():
    return SignalChannel()


@pytest.fixture
def start_engine(channel, make_surface):
    engines = []

    def _start(size=(80, 24), fail_on_frame=None, message="Hello World "):
        surface = make_surface(size=size, fail_on_frame=fail_on_frame)
        engine = AnimationEngine(surface, channel, default_message=message, frame_period=FAST_FRAME)
        engine.start()
        engines.append(engine)
        return engine, surface

    yield _start

    # Never leave a rendering thread behind
    for engine in engines:
        if engine.is_alive:
            channel.send(Stop())
            engine.join(reraise=False)


# ============================================================================
# AWAITING_FIRST_MESSAGE
# ============================================================================

class TestAwaitingFirstMessage:

    def test_stop_before_start_renders_nothing(self, channel, start_engine):
        engine, surface = start_engine()

        channel.send(Stop())
        engine.join()

        assert engine.state is EngineState.STOPPED
        assert surface.frames == []
        assert channel.closed

    def test_new_message_does_not_start_rendering(self, channel, start_engine):
        engine, surface = start_engine()

        channel.send(NewMessage("abc"))
        channel.send(Pause())
        channel.send(Stop())
        engine.join()

        assert surface.frames == []
        assert engine.chars.text == "abc"

    def test_resume_starts_from_origin(self, channel, start_engine):
        engine, surface = start_engine()

        channel.send(NewMessage("Hello World "))
        channel.send(Resume())
        surface.wait_for_frames(4)
        channel.send(Stop())
        engine.join()

        assert surface.frames[:4] == [(0, 0, "H"), (1, 0, "e"), (2, 0, "l"), (3, 0, "l")]


# ============================================================================
# RUNNING / PAUSED
# ============================================================================

class TestRunning:

    def test_each_frame_is_one_hidden_cursor_draw(self, channel, start_engine):
        engine, surface = start_engine()

        channel.send(Resume())
        surface.wait_for_frames(2)
        channel.send(Stop())
        engine.join()

        assert set(surface.call_names()) == {"draw_at"}
        assert not surface.cursor_visible
        assert engine.frames_rendered == len(surface.frames)

    def test_pause_stops_rendering(self, channel, start_engine):
        engine, surface = start_engine()

        channel.send(Resume())
        surface.wait_for_frames(3)
        channel.send(Pause())
        wait_until(lambda: engine.state is EngineState.PAUSED)

        rendered = len(surface.frames)
        time.sleep(0.05)
        assert len(surface.frames) == rendered

        channel.send(Stop())
        engine.join()
        assert len(surface.frames) == rendered

    def test_resume_continues_the_walk(self, channel, start_engine):
        engine, surface = start_engine(size=(10, 5))

        channel.send(Resume())
        surface.wait_for_frames(3)
        channel.send(Pause())
        wait_until(lambda: engine.state is EngineState.PAUSED)
        before = len(surface.frames)

        channel.send(Resume())
        surface.wait_for_frames(before + 3)
        channel.send(Stop())
        engine.join()

        walk = [(x, y) for x, y, _ in surface.frames]
        assert walk == list(islice(PositionGenerator(10, 5), len(walk)))

    def test_message_sent_while_paused_is_kept(self, channel, start_engine):
        """Pause, NewMessage, Resume back to back: NewMessage is applied first"""
        engine, surface = start_engine(message="xyz")

        channel.send(Resume())
        surface.wait_for_frames(3)

        channel.send(Pause())
        channel.send(NewMessage("ab"))
        channel.send(Resume())

        rendered = len(surface.frames)
        surface.wait_for_frames(rendered + 6)
        channel.send(Stop())
        engine.join()

        glyphs = "".join(text for _, _, text in surface.frames)
        switch = next(i for i, glyph in enumerate(glyphs) if glyph in "ab")
        assert set(glyphs[:switch]) <= set("xyz")
        assert set(glyphs[switch:]) <= set("ab")
        assert len(glyphs) - switch >= 6

    def test_stop_while_running(self, channel, start_engine):
        engine, surface = start_engine()

        channel.send(Resume())
        surface.wait_for_frames(2)
        channel.send(Stop())
        engine.join()

        assert engine.state is EngineState.STOPPED
        assert not engine.is_alive

    def test_terminal_size_sampled_once(self, channel, start_engine):
        engine, surface = start_engine(size=(4, 3))

        channel.send(Resume())
        surface.wait_for_frames(1)
        surface.columns, surface.rows = 100, 50
        surface.wait_for_frames(30)
        channel.send(Stop())
        engine.join()

        assert all(x < 4 and y < 3 for x, y, _ in surface.frames)


# ============================================================================
# Failures and lifecycle
# ============================================================================

class TestFailures:

    def test_terminal_error_propagates_to_join(self, channel, start_engine):
        engine, surface = start_engine(fail_on_frame=2)

        channel.send(Resume())

        with pytest.raises(OSError):
            engine.join()

        assert isinstance(engine.error, OSError)
        assert channel.closed
        assert len(surface.frames) == 1

    def test_join_without_reraise(self, channel, start_engine):
        engine, _ = start_engine(fail_on_frame=1)

        channel.send(Resume())
        engine.join(reraise=False)

        with pytest.raises(OSError):
            engine.raise_if_failed()

    def test_start_twice_rejected(self, channel, start_engine):
        engine, _ = start_engine()
        with pytest.raises(RuntimeError):
            engine.start()


def test_default_frame_period_is_10ms(make_surface):
    engine = AnimationEngine(make_surface(), SignalChannel())
    assert engine.frame_period == pytest.approx(0.01)
    assert engine.state is EngineState.AWAITING_FIRST_MESSAGE
