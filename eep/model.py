from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .buffer import LineBuffer
from .constants import EditorConstants


@dataclass
class CursorPosition:
    row: int = 0
    col: int = 0


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class BackspaceMode(Enum):
    """How backspace treats runs of spaces before the cursor."""
    SIMPLE = "simple"
    SMART_INDENT = "smart_indent"


class TextModel:
    """Document plus cursor, with the movement and editing operations.

    Every operation leaves the cursor on a valid buffer position:
    0 <= row < line_count and 0 <= col <= line_len(row).
    """

    buffer: LineBuffer
    cursor_position: CursorPosition

    def __init__(
        self,
        lines: Optional[list[str]] = None,
        backspace_mode: BackspaceMode = BackspaceMode.SIMPLE,
        tab_width: int = EditorConstants.TAB_WIDTH,
        scroll_step: int = EditorConstants.SCROLL_STEP,
    ):
        self.buffer = LineBuffer(lines)
        self.cursor_position = CursorPosition()
        self.backspace_mode = backspace_mode
        self.tab_width = tab_width
        self.scroll_step = scroll_step
        # True when the most recent insertion was a tab expansion
        self.tabbed = False

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "TextModel":
        model = cls(**kwargs)
        model.buffer = LineBuffer.load(text)
        return model

    @property
    def lines(self) -> list[str]:
        return self.buffer.lines

    @property
    def row(self) -> int:
        return self.cursor_position.row

    @property
    def col(self) -> int:
        return self.cursor_position.col

    def current_line_len(self) -> int:
        return self.buffer.line_len(self.cursor_position.row)

    def _clamp_col(self):
        """Snap the column to the end of the current line if it overshoots."""
        line_len = self.current_line_len()
        if self.cursor_position.col > line_len:
            self.cursor_position.col = line_len

    # --- Cursor movement ---

    def move(self, direction: Direction):
        """Move the cursor one step, wrapping horizontally across lines."""
        pos = self.cursor_position
        last_row = self.buffer.line_count() - 1
        if direction == Direction.UP:
            if pos.row > 0:
                pos.row -= 1
        elif direction == Direction.DOWN:
            if pos.row < last_row:
                pos.row += 1
        elif direction == Direction.LEFT:
            if pos.col > 0:
                pos.col -= 1
            elif pos.row > 0:
                pos.row -= 1
                pos.col = self.buffer.line_len(pos.row)
        elif direction == Direction.RIGHT:
            if pos.col < self.buffer.line_len(pos.row):
                pos.col += 1
            elif pos.row < last_row:
                pos.row += 1
                pos.col = 0
        self._clamp_col()

    def move_to_line_start(self):
        self.cursor_position.col = 0

    def move_to_line_end(self):
        self.cursor_position.col = self.current_line_len()

    def move_to_buffer_start(self):
        self.cursor_position.row = 0
        self.cursor_position.col = 0

    def move_to_buffer_end(self):
        self.cursor_position.row = self.buffer.line_count() - 1
        self.cursor_position.col = self.current_line_len()

    def scroll_up(self):
        """Mouse wheel up: a fixed number of single-line moves up."""
        for _ in range(self.scroll_step):
            self.move(Direction.UP)

    def scroll_down(self):
        """Mouse wheel down: a fixed number of single-line moves down."""
        for _ in range(self.scroll_step):
            self.move(Direction.DOWN)

    # --- Editing ---

    def insert_char(self, char: str):
        """Insert a character at the cursor; a tab expands to spaces."""
        pos = self.cursor_position
        if char == '\t':
            self.buffer.insert_text(pos.row, pos.col, ' ' * self.tab_width)
            pos.col += self.tab_width
            self.tabbed = True
            return
        self.tabbed = False
        self.buffer.insert_text(pos.row, pos.col, char)
        pos.col += 1

    def delete_char(self) -> bool:
        """Backspace: delete before the cursor, joining lines at column 0.

        Returns:
            False at the start of the document, where there is nothing to delete.
        """
        pos = self.cursor_position
        if pos.row == 0 and pos.col == 0:
            return False
        if pos.col > 0:
            width = self._unindent_width()
            self.buffer.delete_span(pos.row, pos.col - width, pos.col)
            pos.col -= width
        else:
            pos.col = self.buffer.join_with_previous(pos.row)
            pos.row -= 1
        self.tabbed = False
        return True

    def _unindent_width(self) -> int:
        """Number of characters a backspace at the cursor removes."""
        if self.backspace_mode != BackspaceMode.SMART_INDENT:
            return 1
        pos = self.cursor_position
        if pos.col < self.tab_width:
            return 1
        before = self.buffer.line_text(pos.row)[pos.col - self.tab_width:pos.col]
        if before == ' ' * self.tab_width:
            return self.tab_width
        return 1

    def insert_newline(self):
        """Split the current line at the cursor and move to the new line."""
        pos = self.cursor_position
        self.buffer.split_line(pos.row, pos.col)
        pos.row += 1
        pos.col = 0
        self.tabbed = False

    def delete_char_forward(self) -> bool:
        """Delete the character under the cursor; no-op at end of line."""
        pos = self.cursor_position
        if pos.col >= self.current_line_len():
            return False
        self.buffer.delete_span(pos.row, pos.col, pos.col + 1)
        return True

    def delete_line(self) -> bool:
        """Remove the current line unless it is the only one."""
        pos = self.cursor_position
        if not self.buffer.remove_line(pos.row):
            return False
        last_row = self.buffer.line_count() - 1
        if pos.row > last_row:
            pos.row = last_row
        pos.col = 0
        return True
