from .constants import EditorConstants
from .model import CursorPosition


class Viewport:
    """Scrolling window over the document.

    Offsets name the top-left document cell shown on screen; visible_rows and
    visible_cols are the size of the text area (gutter and status rows
    excluded).
    """

    row_offset: int
    col_offset: int
    visible_rows: int
    visible_cols: int

    def __init__(self, visible_rows: int = 24 - EditorConstants.RESERVED_ROWS, visible_cols: int = 80):
        self.row_offset = 0
        self.col_offset = 0
        self.visible_rows = EditorConstants.MIN_VISIBLE_ROWS
        self.visible_cols = EditorConstants.MIN_VISIBLE_COLS
        self.resize(visible_rows, visible_cols)

    def resize(self, visible_rows: int, visible_cols: int) -> None:
        """Set the text area size, never below one cell in either direction."""
        self.visible_rows = max(EditorConstants.MIN_VISIBLE_ROWS, visible_rows)
        self.visible_cols = max(EditorConstants.MIN_VISIBLE_COLS, visible_cols)

    def reconcile(self, cursor: CursorPosition) -> None:
        """Shift the offsets by the minimum amount that brings the cursor into view.

        A cursor above/left of the window pulls the offset onto it; a cursor
        below/right pushes the offset just far enough that the cursor sits on
        the last visible row/column. Calling this again without moving the
        cursor leaves the offsets unchanged.
        """
        if cursor.row < self.row_offset:
            self.row_offset = cursor.row
        elif cursor.row >= self.row_offset + self.visible_rows:
            self.row_offset = cursor.row - self.visible_rows + 1

        if cursor.col < self.col_offset:
            self.col_offset = cursor.col
        elif cursor.col >= self.col_offset + self.visible_cols:
            self.col_offset = cursor.col - self.visible_cols + 1

    def contains(self, cursor: CursorPosition) -> bool:
        return (self.row_offset <= cursor.row < self.row_offset + self.visible_rows
                and self.col_offset <= cursor.col < self.col_offset + self.visible_cols)

    def visible_document_rows(self) -> range:
        """Document rows covered by the window (may run past the last line)."""
        return range(self.row_offset, self.row_offset + self.visible_rows)
