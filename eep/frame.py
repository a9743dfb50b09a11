"""Frame composition: turns editor state into screen rows, a status bar and a cursor cell."""

from dataclasses import dataclass
from typing import Optional

from .ansi import pad_visible, printable, truncate_visible, visible_length
from .command_line import CommandLine, StatusState
from .constants import EditorConstants
from .model import TextModel
from .modes import EditorMode
from .view import Viewport


@dataclass
class Frame:
    """Backend-agnostic snapshot of one screen.

    rows holds one string per content row, gutter included, each padded to
    the terminal width. status_bar is drawn on the row right below them.
    The cursor cell is (cursor_row, cursor_col), 0-based screen coordinates.
    """
    rows: list[str]
    status_bar: str
    cursor_row: int
    cursor_col: int
    mode: EditorMode
    width: int
    height: int

    @property
    def status_row(self) -> int:
        return len(self.rows)


@dataclass
class Layout:
    """Screen geometry derived from the terminal size and the document."""
    visible_rows: int
    visible_cols: int
    gutter_width: int
    number_width: int


def number_width(line_count: int) -> int:
    """Decimal digit count of the last line number."""
    return len(str(max(1, line_count)))


def compute_layout(width: int, height: int, line_count: int, show_line_numbers: bool) -> Layout:
    """Split the terminal into gutter, text area and the reserved status rows."""
    digits = number_width(line_count) if show_line_numbers else 0
    gutter = digits + EditorConstants.GUTTER_PADDING if show_line_numbers else 0
    return Layout(
        visible_rows=max(EditorConstants.MIN_VISIBLE_ROWS, height - EditorConstants.RESERVED_ROWS),
        visible_cols=max(EditorConstants.MIN_VISIBLE_COLS, width - gutter),
        gutter_width=gutter,
        number_width=digits,
    )


class FrameComposer:
    """Renders a TextModel through a Viewport into a Frame.

    compose() is a pure function of its arguments: it reads the model and
    viewport but never scrolls or moves anything. The caller reconciles the
    viewport first so that the cursor is inside it.
    """

    def __init__(self, show_line_numbers: bool = True):
        self.show_line_numbers = show_line_numbers

    def layout(self, width: int, height: int, line_count: int) -> Layout:
        return compute_layout(width, height, line_count, self.show_line_numbers)

    def compose(
        self,
        model: TextModel,
        viewport: Viewport,
        mode: EditorMode,
        status: StatusState,
        command_line: CommandLine,
        filename: Optional[str],
        width: int,
        height: int,
        modified: bool = False,
    ) -> Frame:
        line_count = model.buffer.line_count()
        layout = self.layout(width, height, line_count)
        rows = [self._compose_row(model, viewport, layout, doc_row, width)
                for doc_row in viewport.visible_document_rows()]

        cursor = model.cursor_position
        cursor_row = min(cursor.row - viewport.row_offset, viewport.visible_rows - 1)
        cursor_col = cursor.col - viewport.col_offset + layout.gutter_width

        return Frame(
            rows=rows,
            status_bar=self.build_status_bar(model, mode, status, command_line, filename, width,
                                             modified=modified),
            cursor_row=max(0, cursor_row),
            cursor_col=max(0, min(cursor_col, width - 1)),
            mode=mode,
            width=width,
            height=height,
        )

    def _compose_row(self, model: TextModel, viewport: Viewport, layout: Layout, doc_row: int, width: int) -> str:
        """One content row: gutter plus the clipped slice of the document line."""
        if doc_row >= model.buffer.line_count():
            return ' ' * width
        gutter = ''
        if layout.gutter_width:
            number = f"{doc_row + 1:>{layout.number_width}}"
            gutter = (EditorConstants.GUTTER_STYLE + number + EditorConstants.RESET
                      + ' ' * EditorConstants.GUTTER_PADDING)
        line = printable(model.buffer.line_text(doc_row))
        start = viewport.col_offset
        visible = line[start:start + viewport.visible_cols]
        row = gutter + visible
        # A gutter as wide as the terminal leaves no room for text
        if visible_length(row) > width:
            row = truncate_visible(row, width)
        return pad_visible(row, width)

    def build_status_bar(
        self,
        model: TextModel,
        mode: EditorMode,
        status: StatusState,
        command_line: CommandLine,
        filename: Optional[str],
        width: int,
        modified: bool = False,
    ) -> str:
        """Compose the status bar: file and mode, message or command, position.

        A modified document gets a [+] after its name.

        The middle segment is truncated (escape-aware) to the room the outer
        segments leave, and the bar is padded or cut so its printable length
        is exactly the terminal width.
        """
        c = EditorConstants
        name = filename if filename else c.NO_NAME
        if modified:
            name += c.MODIFIED_MARKER
        left = (f"{c.STATUS_FILENAME_STYLE}{name}{c.RESET} -- "
                f"{c.STATUS_MODE_STYLE}{mode.value}{c.RESET} -- ")
        cursor = model.cursor_position
        right = (f"{c.STATUS_INFO_STYLE}Ln {cursor.row + 1}/{model.buffer.line_count()} "
                 f"Col {cursor.col + 1}")

        if status.show_command:
            middle = f"{c.STATUS_CMD_STYLE}:{command_line.text}"
        elif status.status_message:
            middle = f"{c.STATUS_MSG_STYLE}{status.status_message}"
        else:
            middle = ''

        available = max(0, width - (visible_length(left) + visible_length(right)))
        if visible_length(middle) > available:
            middle = truncate_visible(middle, available)
        middle = pad_visible(middle, available)

        bar = left + middle + right
        if visible_length(bar) > width:
            bar = truncate_visible(bar, width)
        return pad_visible(bar, width) + c.RESET
