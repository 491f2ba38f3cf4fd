"""Cyclic character source for the marquee"""

from typing import Iterator


class CharGen:
    """
    Endless cycle over the characters of a message

    update() swaps the characters while keeping the phase: the position is
    reduced modulo the new length instead of restarting at 0.
    """

    def __init__(self, text: str):
        if not text:
            raise ValueError("CharGen requires a non-empty message")
        self.chars = list(text)
        self.position = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        char = self.chars[self.position]
        self.position = (self.position + 1) % len(self.chars)
        return char

    def update(self, text: str) -> None:
        if not text:
            raise ValueError("CharGen requires a non-empty message")
        self.chars = list(text)
        self.position = self.position % len(self.chars)

    @property
    def text(self) -> str:
        return "".join(self.chars)
