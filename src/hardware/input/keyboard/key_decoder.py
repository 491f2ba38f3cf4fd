import re
from typing import List

from models.keys import KeyEvent
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TERMINAL)

ESC = '\x1b'

# ESC [ <params> <final>; a match without a final byte is an unfinished sequence
CSI_PATTERN = re.compile(r'\x1b\[([0-9;]*)([\x40-\x7e])?')

CSI_FINAL_KEYS = {
    'A': 'Up',
    'B': 'Down',
    'C': 'Right',
    'D': 'Left',
    'H': 'Home',
    'F': 'End',
    'Z': 'BackTab',
    'P': 'F1',
    'Q': 'F2',
    'R': 'F3',
    'S': 'F4',
}

CSI_TILDE_KEYS = {
    '1': 'Home',
    '2': 'Insert',
    '3': 'Delete',
    '4': 'End',
    '5': 'PageUp',
    '6': 'PageDown',
    '7': 'Home',
    '8': 'End',
    '11': 'F1',
    '12': 'F2',
    '13': 'F3',
    '14': 'F4',
    '15': 'F5',
    '17': 'F6',
    '18': 'F7',
    '19': 'F8',
    '20': 'F9',
    '21': 'F10',
    '23': 'F11',
    '24': 'F12',
}

# ESC O <char> (application cursor / keypad mode)
SS3_KEYS = {
    'A': 'Up',
    'B': 'Down',
    'C': 'Right',
    'D': 'Left',
    'H': 'Home',
    'F': 'End',
    'P': 'F1',
    'Q': 'F2',
    'R': 'F3',
    'S': 'F4',
}

# xterm modifier parameter is 1 + bitmask
MODIFIER_BITS = (
    (4, 'Ctrl'),
    (2, 'Alt'),
    (1, 'Shift'),
)


class KeyDecoder:
    """
    Turns raw terminal input into KeyEvents

    Handles:
    - CR / LF as Enter, DEL / BS as Backspace
    - Arrow, navigation and function keys (CSI and SS3 sequences)
    - Ctrl+Key via control codes
    - Standalone ESC as Escape

    A lone ESC cannot be told apart from the start of a sequence until more
    input arrives (or does not). feed() keeps it buffered and reports it via
    pending_escape; the reader calls flush() when no continuation came.
    """

    def __init__(self):
        self._buffer = ""

    @property
    def pending_escape(self) -> bool:
        return self._buffer.startswith(ESC)

    def feed(self, text: str) -> List[KeyEvent]:
        """Append decoded input text and return every complete key"""
        self._buffer += text
        return self._process_buffer()

    def flush(self) -> List[KeyEvent]:
        """Resolve a buffered ESC that got no continuation into Escape"""
        if not self._buffer.startswith(ESC):
            return []
        self._buffer = self._buffer[1:]
        return [KeyEvent.escape()] + self._process_buffer()

    def _process_buffer(self) -> List[KeyEvent]:
        events: List[KeyEvent] = []

        while self._buffer:
            # ------------------------------------------------------------
            # CSI sequences: ESC [ params final
            # ------------------------------------------------------------
            if self._buffer.startswith(ESC + '['):
                match = CSI_PATTERN.match(self._buffer)
                if match.group(2) is None:
                    if match.end() == len(self._buffer):
                        return events  # wait for full sequence
                    # Not a sequence we understand; treat ESC as its own key
                    log.debug("Malformed escape sequence", sequence=repr(self._buffer[:match.end() + 1]))
                    self._buffer = self._buffer[1:]
                    events.append(KeyEvent.escape())
                    continue

                self._buffer = self._buffer[match.end():]
                events.append(self._decode_csi(match.group(1), match.group(2)))
                continue

            # ------------------------------------------------------------
            # SS3 sequences: ESC O char
            # ------------------------------------------------------------
            if self._buffer.startswith(ESC + 'O'):
                if len(self._buffer) < 3:
                    return events

                final = self._buffer[2]
                self._buffer = self._buffer[3:]
                events.append(KeyEvent.other(SS3_KEYS.get(final, f"SS3({final})")))
                continue

            # ------------------------------------------------------------
            # Standalone ESC (only if nothing else follows)
            # ------------------------------------------------------------
            if self._buffer == ESC:
                return events  # wait for possible continuation

            if self._buffer.startswith(ESC):
                self._buffer = self._buffer[1:]
                events.append(KeyEvent.escape())
                continue

            # ------------------------------------------------------------
            # Normal single-character handling
            # ------------------------------------------------------------
            char = self._buffer[0]
            self._buffer = self._buffer[1:]
            events.append(self._decode_char(char))

        return events

    def _decode_csi(self, params: str, final: str) -> KeyEvent:
        fields = params.split(';') if params else []

        if final == '~':
            base = CSI_TILDE_KEYS.get(fields[0] if fields else '', f"CSI({params}~)")
        else:
            base = CSI_FINAL_KEYS.get(final)
            if base is None:
                log.debug("Unknown CSI sequence", params=params, final=final)
                return KeyEvent.other(f"CSI({params}{final})")

        if len(fields) > 1 and fields[1].isdigit():
            return KeyEvent.other(_with_modifiers(base, int(fields[1])))
        return KeyEvent.other(base)

    def _decode_char(self, char: str) -> KeyEvent:
        if char in ('\r', '\n'):
            return KeyEvent.enter()
        if char in ('\x7f', '\x08'):
            return KeyEvent.backspace()
        if char == '\t':
            return KeyEvent.other("Tab")
        if char == '\x00':
            return KeyEvent.other("Ctrl+Space")
        if '\x01' <= char <= '\x1a':
            return KeyEvent.other(f"Ctrl+{chr(ord(char) + 64)}")  # 0x01 -> 'A'
        if char.isprintable():
            return KeyEvent.printable(char)
        return KeyEvent.other(f"U+{ord(char):04X}")


def _with_modifiers(name: str, modifier_param: int) -> str:
    mask = modifier_param - 1
    prefix = "".join(f"{label}+" for bit, label in MODIFIER_BITS if mask & bit)
    return prefix + name
