"""
Configuration models

Typed view of config.yaml, built by ConfigManager.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from models.enums import LogLevel

DEFAULT_MESSAGE = "Hello World "
DEFAULT_FRAME_PERIOD_MS = 10


@dataclass
class AnimationConfig:
    frame_period_ms: int = DEFAULT_FRAME_PERIOD_MS
    default_message: str = DEFAULT_MESSAGE

    @property
    def frame_period(self) -> float:
        """Frame period in seconds (what time.sleep() expects)"""
        return self.frame_period_ms / 1000


@dataclass
class UIConfig:
    help_text: str = "Type strings. Trace edges by Enter key. Stop by Esc key."
    exit_notice: str = "prepare for exiting..."


@dataclass
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    file: Optional[Path] = None  # None = logging disabled
    use_colors: bool = False


@dataclass
class MarqueeConfig:
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
