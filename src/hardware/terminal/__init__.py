from .surface import ITerminalSurface
from .ansi_surface import AnsiTerminalSurface

__all__ = [
    "ITerminalSurface",
    "AnsiTerminalSurface",
]
