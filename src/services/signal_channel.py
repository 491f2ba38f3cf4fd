"""
Signal Channel - ordered control signal pipe between the two threads

Single producer (InputController), single consumer (AnimationEngine):
- Producer: send(signal)
- Consumer: receive() (blocking) / poll() (non-blocking) / close()
"""

import queue
import threading
from typing import Optional

from models.signals import ControlSignal
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CHANNEL)


class ChannelClosedError(Exception):
    """Raised by send() once the receiving side has closed the channel"""


class SignalChannel:
    """
    FIFO, unbounded channel of ControlSignal values

    Signals are never dropped by the channel itself. The consumer closes
    the channel when it exits; later sends raise ChannelClosedError so the
    producer can tell the receiver is gone.

    Example:
        channel = SignalChannel()

        # Input thread
        channel.send(Pause())

        # Engine thread
        signal = channel.receive()   # blocks
        signal = channel.poll()      # None if nothing pending
    """

    def __init__(self):
        self._queue: "queue.SimpleQueue[ControlSignal]" = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, signal: ControlSignal) -> None:
        """
        Enqueue a signal for the consumer

        Raises:
            ChannelClosedError: the consumer has already exited
        """
        if self._closed.is_set():
            raise ChannelClosedError(f"Cannot send {signal.type.name}: receiver is gone")
        self._queue.put(signal)
        log.debug("Signal sent", signal=signal.type.name)

    def receive(self) -> ControlSignal:
        """Block until the next signal arrives (no timeout)"""
        return self._queue.get()

    def poll(self) -> Optional[ControlSignal]:
        """Return the next pending signal without blocking, or None"""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        """Mark the receiving side as gone"""
        if not self._closed.is_set():
            self._closed.set()
            log.debug("Channel closed")
