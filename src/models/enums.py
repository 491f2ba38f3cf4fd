"""
Enums for the border marquee state machines
"""

from enum import Enum, auto


class Facing(Enum):
    """
    Direction the perimeter cursor is currently walking

    The walk is clockwise: RIGHT along the top edge, DOWN the right edge,
    LEFT along the bottom edge, UP the left edge.
    """
    RIGHT = auto()
    DOWN = auto()
    LEFT = auto()
    UP = auto()


class EngineState(Enum):
    """Animation engine lifecycle states"""
    AWAITING_FIRST_MESSAGE = auto()  # Waiting for the first Resume
    RUNNING = auto()                 # Rendering one glyph per frame
    PAUSED = auto()                  # Suspended while the user types
    STOPPED = auto()                 # Terminal state, task ends


class SignalType(Enum):
    """Control signal vocabulary between input controller and engine"""
    PAUSE = auto()
    RESUME = auto()
    STOP = auto()
    NEW_MESSAGE = auto()


class KeyKind(Enum):
    """Key identities the input controller dispatches on"""
    CHAR = auto()       # Printable character
    ENTER = auto()      # Accept key
    ESCAPE = auto()     # Cancel key
    BACKSPACE = auto()  # Delete last character
    OTHER = auto()      # Anything else (arrows, function keys, Ctrl+X, ...)


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    TERMINAL = auto()    # Raw mode, escape output, key decoding
    INPUT = auto()       # Input controller, message buffer
    ANIMATION = auto()   # Engine state changes, frames
    CHANNEL = auto()     # Control signal traffic
    SYSTEM = auto()      # Startup, shutdown, errors
