"""Inline command bar: the typed command buffer, status slot and command interpreter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .constants import EditorConstants

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)


@dataclass
class StatusState:
    """What the middle of the status bar shows.

    status_message is a single slot: each new message replaces the previous
    one. show_command selects the command line view instead.
    """
    status_message: Optional[str] = None
    show_command: bool = False


class CommandLine:
    """Characters typed after ':' in Command mode."""

    def __init__(self):
        self._chars: list[str] = []

    @property
    def text(self) -> str:
        return ''.join(self._chars)

    def append(self, char: str) -> None:
        self._chars.append(char)

    def pop(self) -> None:
        """Remove the last character; no-op when empty."""
        if self._chars:
            self._chars.pop()

    def clear(self) -> None:
        self._chars.clear()

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return self.text


_LINE_NUMBERS_ON = ('set nu', 'set number')
_LINE_NUMBERS_OFF = ('set nonu', 'set nonumber')


def execute_command_line(editor: 'Editor', text: str) -> bool:
    """Interpret a command line and invoke the matching editor operation.

    Supported commands:
        q           quit
        w           save to the current filename
        wq          save, then quit only if the save succeeded
        w <path>    set the filename, then save
        set nu      show the line number gutter
        set nonu    hide the line number gutter

    Returns:
        True if the command was recognized and succeeded.
    """
    cmd = text.strip()
    logger.debug(f"Executing command line {cmd!r}")

    if cmd == 'q':
        editor.quit()
        return True
    if cmd == 'w':
        return editor.save()
    if cmd == 'wq':
        if editor.save():
            editor.quit()
            return True
        return False
    if cmd.startswith('w '):
        editor.filename = cmd[2:].strip()
        return editor.save()
    if cmd in _LINE_NUMBERS_ON:
        editor.set_line_numbers(True)
        return True
    if cmd in _LINE_NUMBERS_OFF:
        editor.set_line_numbers(False)
        return True

    logger.info(f"Unknown command {cmd!r}")
    editor.set_status(EditorConstants.UNKNOWN_COMMAND_MESSAGE.format(cmd))
    return False
