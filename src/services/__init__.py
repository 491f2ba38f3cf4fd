"""Services layer"""

from .signal_channel import SignalChannel, ChannelClosedError

__all__ = [
    "SignalChannel",
    "ChannelClosedError",
]
