"""
Generators driving the marquee

- perimeter: clockwise border walk (PositionGenerator)
- char_gen: endless cycle over the message characters (CharGen)
"""

from .perimeter import PositionGenerator
from .char_gen import CharGen

__all__ = [
    "PositionGenerator",
    "CharGen",
]
