"""Decoded keyboard input"""

from dataclasses import dataclass

from models.enums import KeyKind


@dataclass(frozen=True)
class KeyEvent:
    """
    One decoded key press

    Attributes:
        kind: Key identity the controller dispatches on
        char: The character for KeyKind.CHAR, empty otherwise
        name: Textual identity (e.g. "Up", "F5", "Ctrl+C")
    """
    kind: KeyKind
    char: str = ""
    name: str = ""

    @classmethod
    def printable(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char=char, name=char)

    @classmethod
    def enter(cls) -> "KeyEvent":
        return cls(KeyKind.ENTER, name="Enter")

    @classmethod
    def escape(cls) -> "KeyEvent":
        return cls(KeyKind.ESCAPE, name="Esc")

    @classmethod
    def backspace(cls) -> "KeyEvent":
        return cls(KeyKind.BACKSPACE, name="Backspace")

    @classmethod
    def other(cls, name: str) -> "KeyEvent":
        return cls(KeyKind.OTHER, name=name)

    def __str__(self) -> str:
        return self.name
