"""
Models package - Data models for the border marquee
"""

from .enums import Facing, EngineState, SignalType, KeyKind, LogLevel, LogCategory
from .keys import KeyEvent
from .signals import ControlSignal, Pause, Resume, Stop, NewMessage

__all__ = [
    'Facing',
    'EngineState',
    'SignalType',
    'KeyKind',
    'LogLevel',
    'LogCategory',
    'KeyEvent',
    'ControlSignal',
    'Pause',
    'Resume',
    'Stop',
    'NewMessage',
]
