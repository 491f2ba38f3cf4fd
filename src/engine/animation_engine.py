"""
Animation Engine

Owns the border rendering. Runs on its own thread, driven only by the
control signals arriving on the SignalChannel.
"""

import threading
import time
from typing import Optional

from animations.char_gen import CharGen
from animations.perimeter import PositionGenerator
from hardware.terminal.surface import ITerminalSurface
from models.config import DEFAULT_FRAME_PERIOD_MS, DEFAULT_MESSAGE
from models.enums import EngineState, SignalType
from models.signals import ControlSignal
from services.signal_channel import SignalChannel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


class AnimationEngine:
    """
    Border marquee state machine

    States:
        AWAITING_FIRST_MESSAGE -> RUNNING <-> PAUSED -> STOPPED

    • AWAITING_FIRST_MESSAGE / PAUSED block on the channel. NewMessage swaps
      the characters without leaving the state, Resume starts rendering,
      Stop ends the task.
    • RUNNING polls the channel once per frame (so a Pause is honoured
      within one frame period), then renders one glyph and sleeps.

    The terminal size is sampled once when the task starts; a resized
    terminal keeps being traced with the old dimensions.

    Terminal errors are not handled here: they end the task and are
    re-raised by join().
    """

    def __init__(
        self,
        surface: ITerminalSurface,
        channel: SignalChannel,
        default_message: str = DEFAULT_MESSAGE,
        frame_period: float = DEFAULT_FRAME_PERIOD_MS / 1000,
    ):
        self.surface = surface
        self.channel = channel
        self.frame_period = frame_period

        self.chars = CharGen(default_message)
        self.positions: Optional[PositionGenerator] = None
        self.state = EngineState.AWAITING_FIRST_MESSAGE
        self.frames_rendered = 0

        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    # ============================================================
    # Thread lifecycle
    # ============================================================

    def start(self) -> None:
        """Spawn the engine thread"""
        if self._thread is not None:
            raise RuntimeError("AnimationEngine already started")

        self._thread = threading.Thread(target=self._thread_main, name="animation-engine", daemon=True)
        self._thread.start()

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def join(self, reraise: bool = True) -> None:
        """
        Wait (without timeout) for the engine thread to finish

        Args:
            reraise: re-raise the exception that killed the engine, if any
        """
        if self._thread is not None:
            self._thread.join()
        if reraise:
            self.raise_if_failed()

    def raise_if_failed(self) -> None:
        if self._error is not None:
            raise self._error

    def _thread_main(self) -> None:
        try:
            self.run()
        except Exception as e:
            log.error("Animation engine crashed", error=str(e), error_type=type(e).__name__)
            self._error = e

    # ============================================================
    # State machine
    # ============================================================

    def run(self) -> None:
        """Run the state machine until Stop (blocking, current thread)"""
        width, height = self.surface.size()
        self.positions = PositionGenerator(width, height)
        log.info("Animation engine started", width=width, height=height)

        try:
            while self.state is not EngineState.STOPPED:
                if self.state is EngineState.RUNNING:
                    self._run_frame()
                else:
                    self._handle_signal(self.channel.receive())
        finally:
            self.channel.close()

        log.info("Animation engine stopped", frames=self.frames_rendered)

    def _handle_signal(self, signal: ControlSignal) -> None:
        """Apply a signal received while AWAITING_FIRST_MESSAGE or PAUSED"""
        if signal.type is SignalType.NEW_MESSAGE:
            self.chars.update(signal.text)
            log.debug("Message replaced", length=len(signal.text), state=self.state.name)
        elif signal.type is SignalType.RESUME:
            self._set_state(EngineState.RUNNING)
        elif signal.type is SignalType.STOP:
            self._set_state(EngineState.STOPPED)

    def _run_frame(self) -> None:
        signal = self.channel.poll()
        if signal is not None:
            if signal.type is SignalType.PAUSE:
                self._set_state(EngineState.PAUSED)
                return
            if signal.type is SignalType.STOP:
                self._set_state(EngineState.STOPPED)
                return
            if signal.type is SignalType.NEW_MESSAGE:
                self.chars.update(signal.text)

        x, y = next(self.positions)
        glyph = next(self.chars)

        self.surface.draw_at(x, y, glyph, hide_cursor=True)
        self.frames_rendered += 1

        time.sleep(self.frame_period)

    def _set_state(self, state: EngineState) -> None:
        if state is not self.state:
            log.debug("Engine state changed", old=self.state.name, new=state.name)
            self.state = state
