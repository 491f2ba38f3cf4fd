#!/usr/bin/env python3
"""
main.py - Border marquee entry point
------------------------------------

Responsible for:
- loading configuration and setting up the logger
- wiring terminal surface, signal channel, engine and input controller
- mapping the outcome to a process exit code (0 after Esc, 1 on failure)

Controls:
    type     edit the message on the top line
    Enter    trace the border with the message (empty line = "Hello World ")
    Esc      stop and restore the terminal
"""

import sys
from typing import Optional, TextIO

from controllers.input_controller import InputController
from engine.animation_engine import AnimationEngine
from hardware.terminal.ansi_surface import AnsiTerminalSurface
from managers.config_manager import ConfigManager
from models.config import LoggingConfig
from models.enums import LogCategory, LogLevel
from services.signal_channel import SignalChannel
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def setup_logging(config: LoggingConfig) -> Optional[TextIO]:
    """
    Point the logger at the configured file (the terminal is the display)

    Returns:
        The opened log stream, or None when logging is disabled
    """
    if config.file is None:
        configure_logger(config.level, use_colors=False, stream=None, enabled=False)
        return None

    config.file.parent.mkdir(parents=True, exist_ok=True)
    stream = open(config.file, "a", encoding="utf-8")
    configure_logger(config.level, use_colors=config.use_colors, stream=stream, enabled=True)
    return stream


def main() -> int:
    """Run the marquee until Esc; returns the process exit code."""
    # Until the log file is known only config problems are worth reporting
    configure_logger(LogLevel.WARN, use_colors=sys.stderr.isatty(), stream=sys.stderr)
    log_stream = None

    try:
        config = ConfigManager().load()
        log_stream = setup_logging(config.logging)
        log.info("Starting border marquee...")

        surface = AnsiTerminalSurface()
        channel = SignalChannel()
        engine = AnimationEngine(
            surface,
            channel,
            default_message=config.animation.default_message,
            frame_period=config.animation.frame_period,
        )
        controller = InputController(
            surface,
            channel,
            engine,
            default_message=config.animation.default_message,
            ui=config.ui,
        )

        controller.run()
        log.info("Border marquee finished")

    except Exception as e:
        log.error("Border marquee failed", error=str(e), error_type=type(e).__name__)
        print(f"border-marquee: {e}", file=sys.stderr)
        return 1

    finally:
        if log_stream is not None:
            configure_logger(enabled=False)
            log_stream.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
