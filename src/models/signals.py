"""Control signals sent from the input controller to the animation engine"""

from dataclasses import dataclass

from models.enums import SignalType


@dataclass(init=False)
class ControlSignal:
    """
    Base control signal.

    - type: SignalType (what the engine should do)
    """

    type: SignalType

    def __init__(self, *, type: SignalType):
        self.type = type


@dataclass(init=False)
class Pause(ControlSignal):
    """Suspend rendering until the next Resume"""

    def __init__(self):
        super().__init__(type=SignalType.PAUSE)


@dataclass(init=False)
class Resume(ControlSignal):
    """Start or continue rendering"""

    def __init__(self):
        super().__init__(type=SignalType.RESUME)


@dataclass(init=False)
class Stop(ControlSignal):
    """Terminate the engine task"""

    def __init__(self):
        super().__init__(type=SignalType.STOP)


@dataclass(init=False)
class NewMessage(ControlSignal):
    """Replace the characters cycled around the border"""
    text: str

    def __init__(self, text: str):
        """
        Args:
            text: Snapshot of the typed message (never empty)
        """
        if not text:
            raise ValueError("NewMessage requires non-empty text")
        super().__init__(type=SignalType.NEW_MESSAGE)
        self.text = text
