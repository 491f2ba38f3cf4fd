from typing import Protocol, Tuple

from models.keys import KeyEvent


class ITerminalSurface(Protocol):
    """
    Terminal abstraction used by the input controller and the engine.

    Implementations:
    - write immediately (no batching across calls)
    - raise OSError on I/O failure (never swallow it)
    - read_key() blocks until a key arrives
    """

    def enable_raw_mode(self) -> None:
        ...

    def disable_raw_mode(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def move_to(self, x: int, y: int) -> None:
        """Move the cursor to absolute zero-based (column, row)"""
        ...

    def hide_cursor(self) -> None:
        ...

    def show_cursor(self) -> None:
        ...

    def print(self, text: str) -> None:
        """Write text at the current cursor position"""
        ...

    def draw_at(self, x: int, y: int, text: str, hide_cursor: bool = False) -> None:
        """Move to (column, row) and write text as one atomic write"""
        ...

    def size(self) -> Tuple[int, int]:
        """Current (columns, rows)"""
        ...

    def read_key(self) -> KeyEvent:
        ...
