"""
Input Controller

Owns the keyboard and the typed message buffer. Runs on the main thread and
steers the AnimationEngine through the SignalChannel.
"""

from typing import List, Optional

from engine.animation_engine import AnimationEngine
from hardware.terminal.surface import ITerminalSurface
from models.config import DEFAULT_MESSAGE, UIConfig
from models.enums import KeyKind
from models.keys import KeyEvent
from models.signals import ControlSignal, NewMessage, Pause, Resume, Stop
from services.signal_channel import ChannelClosedError, SignalChannel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.INPUT)

# Columns kept free around the input line
INPUT_MARGIN = 2

# Input line position (column, row)
INPUT_LINE = (1, 1)
HELP_LINE = (1, 2)


class InputController:
    """
    Keyboard loop driving the marquee

    Per key press:
    1. Pause the engine (so typing never races the renderer)
    2. Dispatch the key:
       - printable / other keys: append to the buffer (capacity clamp)
       - Backspace: drop the last character
       - Enter: send the message and Resume, no redraw
       - Esc: Stop the engine, wait for it, leave the loop
    3. Redraw the input line

    Capacity clamp: the buffer plus its 2-column margin must stay narrower
    than the terminal, otherwise the keystroke is dropped silently.

    Example:
        controller = InputController(surface, channel, engine)
        controller.run()   # returns after Esc, terminal restored
    """

    def __init__(
        self,
        surface: ITerminalSurface,
        channel: SignalChannel,
        engine: AnimationEngine,
        default_message: str = DEFAULT_MESSAGE,
        ui: Optional[UIConfig] = None,
    ):
        self.surface = surface
        self.channel = channel
        self.engine = engine
        self.default_message = default_message
        self.ui = ui or UIConfig()

        self.buffer: List[str] = []

    @property
    def message(self) -> str:
        return "".join(self.buffer)

    # ============================================================
    # Main loop
    # ============================================================

    def run(self) -> None:
        """
        Enter raw mode, start the engine and process keys until Esc

        Terminal cleanup always runs, also when a terminal error ends the
        loop early.
        """
        self.surface.enable_raw_mode()
        try:
            self.surface.clear()
            self.surface.draw_at(*HELP_LINE, self.ui.help_text)

            self.engine.start()
            log.info("Input controller ready")

            while True:
                key = self.surface.read_key()
                self.engine.raise_if_failed()
                if not self.handle_key(key):
                    break
        finally:
            self._cleanup()

    def handle_key(self, key: KeyEvent) -> bool:
        """
        Process one key press

        Returns:
            False when the controller loop should end (Esc), True otherwise
        """
        self._send(Pause())

        width, _ = self.surface.size()
        inner_width = width - INPUT_MARGIN

        if key.kind is KeyKind.CHAR:
            self._append(key.char, inner_width)
        elif key.kind is KeyKind.ENTER:
            self._accept()
            return True
        elif key.kind is KeyKind.ESCAPE:
            self._shutdown()
            return False
        elif key.kind is KeyKind.BACKSPACE:
            if self.buffer:
                self.buffer.pop()
        else:
            self._append(key.name, inner_width)

        self._redraw(inner_width)
        return True

    # ============================================================
    # Key actions
    # ============================================================

    def _append(self, text: str, inner_width: int) -> None:
        if len(self.buffer) + len(text) < inner_width:
            self.buffer.extend(text)
        else:
            log.debug("Keystroke dropped (input line full)", key=text, length=len(self.buffer))

    def _accept(self) -> None:
        if not self.buffer:
            self.buffer.extend(self.default_message)

        message = self.message
        self._send(NewMessage(message))
        self.buffer.clear()
        self._send(Resume())
        log.info("Message accepted", length=len(message))

    def _shutdown(self) -> None:
        self.surface.draw_at(*INPUT_LINE, self.ui.exit_notice)
        self._send(Stop())
        self.engine.join()
        log.info("Animation engine joined")

    def _redraw(self, inner_width: int) -> None:
        self.surface.draw_at(*INPUT_LINE, " " * inner_width)
        self.surface.draw_at(*INPUT_LINE, self.message[:max(inner_width, 0)])
        self.surface.show_cursor()

    # ============================================================
    # Helpers
    # ============================================================

    def _send(self, signal: ControlSignal) -> None:
        try:
            self.channel.send(signal)
        except ChannelClosedError:
            # Engine already gone (shutdown race); nothing left to steer
            log.debug("Signal not delivered, engine has exited", signal=signal.type.name)

    def _cleanup(self) -> None:
        if self.engine.is_alive:
            # Error path: make sure the engine stops writing before raw mode ends
            self._send(Stop())
            self.engine.join(reraise=False)

        try:
            self.surface.clear()
            self.surface.move_to(0, 0)
            self.surface.show_cursor()
        finally:
            self.surface.disable_raw_mode()
            log.info("Terminal restored")
