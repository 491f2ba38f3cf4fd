import codecs
import os
import select
import shutil
import sys
import termios
import threading
import tty
from collections import deque
from typing import Deque, Optional, TextIO, Tuple

from hardware.input.keyboard.key_decoder import KeyDecoder
from models.keys import KeyEvent
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TERMINAL)

CSI = '\x1b['

# How long a lone ESC waits for the rest of an escape sequence
ESCAPE_CONTINUATION_TIMEOUT = 0.05


class AnsiTerminalSurface:
    """
    VT100/ANSI terminal surface over stdin/stdout

    Intended for:
    - SSH sessions
    - VS Code integrated terminal
    - Local Unix terminals

    Features:
    - Raw input mode (termios), restored by disable_raw_mode()
    - Cursor movement, screen clearing, cursor visibility via CSI sequences
    - Blocking key reads decoded by KeyDecoder (UTF-8 aware)

    Every output call writes and flushes immediately so that the input
    controller and the animation engine never leave each other's output
    sitting in the buffer.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._old_settings = None
        self._decoder = KeyDecoder()
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: Deque[KeyEvent] = deque()
        self._write_lock = threading.Lock()

    # ------------------------------------------------------------
    # Input mode
    # ------------------------------------------------------------

    def is_tty(self) -> bool:
        return self._stdin.isatty() and self._stdout.isatty()

    def enable_raw_mode(self) -> None:
        """
        Save current terminal settings and switch stdin to raw mode

        Raises:
            RuntimeError: STDIN or STDOUT is not a terminal
        """
        if not self.is_tty():
            log.info("STDIN/STDOUT is not a TTY, cannot enter raw mode")
            raise RuntimeError("STDIN/STDOUT is not a TTY")

        fd = self._stdin.fileno()
        self._old_settings = termios.tcgetattr(fd)
        tty.setraw(fd)
        log.info("Raw mode enabled")

    def disable_raw_mode(self) -> None:
        if self._old_settings is None:
            return
        termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._old_settings)
        self._old_settings = None
        log.debug("Terminal settings restored")

    # ------------------------------------------------------------
    # Output
    # ------------------------------------------------------------

    def clear(self) -> None:
        self._write(f"{CSI}2J")

    def move_to(self, x: int, y: int) -> None:
        # CUP is one-based, row first
        self._write(f"{CSI}{y + 1};{x + 1}H")

    def hide_cursor(self) -> None:
        self._write(f"{CSI}?25l")

    def show_cursor(self) -> None:
        self._write(f"{CSI}?25h")

    def print(self, text: str) -> None:
        self._write(text)

    def draw_at(self, x: int, y: int, text: str, hide_cursor: bool = False) -> None:
        """Move and write text in one flushed write, never split by the other thread"""
        prefix = f"{CSI}?25l" if hide_cursor else ""
        self._write(f"{prefix}{CSI}{y + 1};{x + 1}H{text}")

    def size(self) -> Tuple[int, int]:
        columns, rows = shutil.get_terminal_size()
        return columns, rows

    def _write(self, data: str) -> None:
        with self._write_lock:
            self._stdout.write(data)
            self._stdout.flush()

    # ------------------------------------------------------------
    # Input
    # ------------------------------------------------------------

    def read_key(self) -> KeyEvent:
        """
        Block until the next key press

        Raises:
            EOFError: stdin was closed
            OSError: reading stdin failed
        """
        fd = self._stdin.fileno()

        while not self._pending:
            if self._decoder.pending_escape and not self._wait_readable(fd, ESCAPE_CONTINUATION_TIMEOUT):
                # Nothing followed the ESC byte: it was the Escape key itself
                self._pending.extend(self._decoder.flush())
                continue

            chunk = os.read(fd, 32)
            if not chunk:
                raise EOFError("Terminal input closed")
            self._pending.extend(self._decoder.feed(self._utf8.decode(chunk)))

        key = self._pending.popleft()
        log.debug("Key decoded", kind=key.kind.name, name=key.name)
        return key

    @staticmethod
    def _wait_readable(fd: int, timeout: float) -> bool:
        ready, _, _ = select.select([fd], [], [], timeout)
        return bool(ready)
