"""Keyboard and mouse input handling using curtsies-style tokens."""

import logging
import re
from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key token from the input source
    is_alt: bool = False
    is_ctrl: bool = False
    is_sequence: bool = False


class ScrollDirection(Enum):
    UP = "up"
    DOWN = "down"


@dataclass
class MouseEvent:
    """A mouse wheel notch; other mouse activity is not reported."""
    direction: ScrollDirection
    raw: str = ""


InputEvent = Union[KeyEvent, MouseEvent]

# SGR extended mouse report: ESC [ < button ; column ; row (M | m)
_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")
# Legacy X10 mouse report: ESC [ M followed by three encoded bytes
_X10_MOUSE_RE = re.compile(r"^\x1b\[M(.)(.)(.)$", re.DOTALL)

_SGR_MOUSE_PREFIX = "\x1b[<"
_MAX_MOUSE_REPORT_LEN = 32

_WHEEL_UP_BUTTON = 64
_WHEEL_DOWN_BUTTON = 65


def parse_mouse(key_str: str) -> Optional[MouseEvent]:
    """Parse a mouse report into a wheel event, or None for anything else."""
    m = _SGR_MOUSE_RE.match(key_str)
    if m:
        button = int(m.group(1))
    else:
        m = _X10_MOUSE_RE.match(key_str)
        if not m:
            return None
        button = ord(m.group(1)) - 32
    # Strip shift/meta/ctrl modifier bits
    button &= ~(4 | 8 | 16)
    if button == _WHEEL_UP_BUTTON:
        return MouseEvent(ScrollDirection.UP, raw=key_str)
    if button == _WHEEL_DOWN_BUTTON:
        return MouseEvent(ScrollDirection.DOWN, raw=key_str)
    return None


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get next input event and map curtsies-style names to events.

        Returns None on timeout and for mouse reports other than the wheel.
        """
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        key_str = str(key)
        if key_str.startswith(_SGR_MOUSE_PREFIX):
            return self._read_mouse_report(key_str)
        return self.parse_event(key)

    def _read_mouse_report(self, start: str) -> Optional[MouseEvent]:
        """Reassemble an SGR mouse report that curtsies delivers piecewise.

        curtsies does not know SGR mouse reports: it yields ESC [ < as one
        token and every following byte as its own token. The pieces are
        collected up to the final M or m and parsed as a whole. An incomplete
        report is dropped so its digits never reach the document.
        """
        report = start
        while not report.endswith(('M', 'm')):
            if len(report) > _MAX_MOUSE_REPORT_LEN:
                logger.debug(f"Dropping oversized mouse report {report!r}")
                return None
            key = self.terminal.get_key(EditorConstants.MOUSE_REPORT_TIMEOUT)
            if not key:
                logger.debug(f"Dropping incomplete mouse report {report!r}")
                return None
            report += str(key)
        return parse_mouse(report)

    def parse_event(self, key) -> InputEvent:
        """Parse a raw token into a MouseEvent when it is a wheel report, else a KeyEvent."""
        mouse = parse_mouse(str(key))
        if mouse is not None:
            return mouse
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: curtsies token (or any object whose str() is the token)

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+u>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1]
            lower = name.lower()
            # Support both '-' and '+' as modifier separators
            lower = lower.replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set()
            base = parts[-1]
            if len(parts) > 1:
                mods = set(parts[:-1])
            # Normalize meta->alt
            if 'meta' in mods:
                mods.add('alt')
            # Treat 'esc' as alt modifier when combined with another key
            if 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            specials = {
                'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
                'page_up', 'page_down', 'insert'
            }
            # Map named whitespace tokens to regular characters
            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            # Control modified letters
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are Enter; Ctrl-H is Backspace
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if 'alt' in mods:
                if base in specials or len(base) == 1:
                    return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
            if base in specials:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            # Fallback: treat unknown token as special
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)

        if len(key_str) == 1:
            o = ord(key_str)
            # DEL is what most terminals send for Backspace
            if o == 127 or o == 8:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if o == 9:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        # Bare ESC
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        # Regular character
        return KeyEvent(
            key_type=KeyType.REGULAR,
            value=key_str,
            raw=key_str,
            is_sequence=False
        )
