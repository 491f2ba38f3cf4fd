"""
In-memory terminal surface for controller and engine tests
"""

import errno
import threading
import time
from typing import Iterable, List, Optional, Tuple

from models.keys import KeyEvent

ENGINE_THREAD = "animation-engine"

# Upper bound for test-side waits on the engine thread
WAIT_TIMEOUT = 5.0


class WaitForFrames:
    """Script step: block read_key() until the engine rendered `count` glyphs"""

    def __init__(self, count: int):
        self.count = count


class WaitForEngineExit:
    """Script step: block read_key() until the engine thread has finished"""


class RecordingStdout:
    """stdout stand-in that keeps every write separately"""

    def __init__(self):
        self.writes: List[str] = []

    def write(self, data: str) -> int:
        # Yield so a concurrent writer gets a chance to run mid-operation
        time.sleep(0)
        self.writes.append(data)
        return len(data)

    def flush(self) -> None:
        pass

    def isatty(self) -> bool:
        return False

    def getvalue(self) -> str:
        return "".join(self.writes)


class FakeTerminalSurface:
    """
    Terminal surface that records output instead of drawing

    - calls: every operation in order, e.g. ("draw_at", 1, 1, "hi")
    - prints: (x, y, text, thread) for every print and draw_at
    - read_key() replays the scripted keys; EOFError once they run out
    """

    def __init__(
        self,
        size: Tuple[int, int] = (80, 24),
        keys: Iterable = (),
        fail_on_frame: Optional[int] = None,
    ):
        self.columns, self.rows = size
        self.script = list(keys)
        self.fail_on_frame = fail_on_frame

        self.calls: List[tuple] = []
        self.prints: List[Tuple[int, int, str, str]] = []
        self.raw_mode = False
        self.cursor_visible = True
        self._cursor = (0, 0)
        self._cond = threading.Condition()

    # ------------------------------------------------------------
    # ITerminalSurface
    # ------------------------------------------------------------

    def enable_raw_mode(self) -> None:
        self._record("enable_raw_mode")
        self.raw_mode = True

    def disable_raw_mode(self) -> None:
        self._record("disable_raw_mode")
        self.raw_mode = False

    def clear(self) -> None:
        self._record("clear")

    def move_to(self, x: int, y: int) -> None:
        self._record("move_to", x, y)
        self._cursor = (x, y)

    def hide_cursor(self) -> None:
        self._record("hide_cursor")
        self.cursor_visible = False

    def show_cursor(self) -> None:
        self._record("show_cursor")
        self.cursor_visible = True

    def print(self, text: str) -> None:
        with self._cond:
            self.calls.append(("print", text))
            self._put(text)

    def draw_at(self, x: int, y: int, text: str, hide_cursor: bool = False) -> None:
        thread = threading.current_thread().name
        if thread == ENGINE_THREAD and self.fail_on_frame is not None:
            if len(self.frames) + 1 >= self.fail_on_frame:
                raise OSError(errno.EIO, "Input/output error")

        with self._cond:
            self.calls.append(("draw_at", x, y, text))
            if hide_cursor:
                self.cursor_visible = False
            self._cursor = (x, y)
            self._put(text)

    def size(self) -> Tuple[int, int]:
        return self.columns, self.rows

    def read_key(self) -> KeyEvent:
        while self.script:
            step = self.script.pop(0)
            if isinstance(step, WaitForFrames):
                self.wait_for_frames(step.count)
                continue
            if isinstance(step, WaitForEngineExit):
                self.wait_for_engine_exit()
                continue
            return step
        raise EOFError("No more scripted keys")

    # ------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------

    @property
    def frames(self) -> List[Tuple[int, int, str]]:
        """Glyphs written by the engine thread, in order"""
        return [(x, y, text) for x, y, text, thread in self.prints if thread == ENGINE_THREAD]

    def wait_for_frames(self, count: int, timeout: float = WAIT_TIMEOUT) -> None:
        with self._cond:
            done = self._cond.wait_for(lambda: len(self.frames) >= count, timeout)
        if not done:
            raise AssertionError(f"Engine rendered {len(self.frames)} frames, expected {count}")

    def wait_for_engine_exit(self, timeout: float = WAIT_TIMEOUT) -> None:
        for thread in threading.enumerate():
            if thread.name == ENGINE_THREAD:
                thread.join(timeout)
                if thread.is_alive():
                    raise AssertionError("Engine thread still running")

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def _put(self, text: str) -> None:
        # Caller holds self._cond
        x, y = self._cursor
        self.prints.append((x, y, text, threading.current_thread().name))
        self._cursor = (x + len(text), y)
        self._cond.notify_all()

    def _record(self, name: str, *args) -> None:
        with self._cond:
            self.calls.append((name, *args))

