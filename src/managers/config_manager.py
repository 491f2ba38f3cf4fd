"""
Config Manager

Loads config.yaml into a MarqueeConfig, falling back to factory defaults.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from models.config import AnimationConfig, LoggingConfig, MarqueeConfig, UIConfig
from models.enums import LogLevel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

PathLike = Union[str, Path]


class ConfigManager:
    """
    Main configuration manager

    Loads config/config.yaml (relative to src/) and parses it into typed
    dataclasses. Any failure reading or validating the main file is logged
    and the factory defaults file is used instead; a broken defaults file
    is fatal.

    Example:
        config = ConfigManager().load()
        config.animation.frame_period      # 0.01
        config.animation.default_message   # "Hello World "
    """

    def __init__(
        self,
        config_path: PathLike = "config/config.yaml",
        defaults_path: PathLike = "config/factory_defaults.yaml",
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to src/ unless absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[MarqueeConfig] = None

    def load(self) -> MarqueeConfig:
        """
        Load YAML configuration

        Process:
        1. Load and validate main config.yaml
        2. Fallback to factory defaults on any failure

        Returns:
            Parsed MarqueeConfig
        """
        src_dir = Path(__file__).parent.parent

        try:
            self.data = self._read_yaml(src_dir / self.config_path)
            self.config = self.parse(self.data)
            log.info("Configuration loaded", path=str(self.config_path))

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            self.data = self._read_yaml(src_dir / self.factory_defaults_path)
            self.config = self.parse(self.data)

        return self.config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: top level must be a mapping, got {type(data).__name__}")
        return data

    # ------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------

    @classmethod
    def parse(cls, data: Dict[str, Any]) -> MarqueeConfig:
        """
        Build a MarqueeConfig from raw YAML data

        Missing sections/keys take dataclass defaults.

        Raises:
            ValueError: on invalid values
        """
        return MarqueeConfig(
            animation=cls._parse_animation(cls._section(data, "animation")),
            ui=cls._parse_ui(cls._section(data, "ui")),
            logging=cls._parse_logging(cls._section(data, "logging")),
        )

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'{name}' must be a mapping")
        return section

    @staticmethod
    def _parse_animation(section: Dict[str, Any]) -> AnimationConfig:
        defaults = AnimationConfig()

        period = section.get("frame_period_ms", defaults.frame_period_ms)
        if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
            raise ValueError(f"animation.frame_period_ms must be a positive integer, got {period!r}")

        message = section.get("default_message", defaults.default_message)
        if not isinstance(message, str) or not message:
            raise ValueError("animation.default_message must be a non-empty string")

        return AnimationConfig(frame_period_ms=period, default_message=message)

    @staticmethod
    def _parse_ui(section: Dict[str, Any]) -> UIConfig:
        defaults = UIConfig()
        help_text = section.get("help_text", defaults.help_text)
        exit_notice = section.get("exit_notice", defaults.exit_notice)

        for key, value in (("help_text", help_text), ("exit_notice", exit_notice)):
            if not isinstance(value, str):
                raise ValueError(f"ui.{key} must be a string")

        return UIConfig(help_text=help_text, exit_notice=exit_notice)

    @staticmethod
    def _parse_logging(section: Dict[str, Any]) -> LoggingConfig:
        level_name = str(section.get("level", LogLevel.INFO.name)).upper()
        try:
            level = LogLevel[level_name]
        except KeyError:
            raise ValueError(f"Unknown log level: {level_name}")

        file = section.get("file")
        use_colors = bool(section.get("use_colors", False))

        return LoggingConfig(
            level=level,
            file=Path(file).expanduser() if file else None,
            use_colors=use_colors,
        )
