"""Line buffer holding the document text."""

from typing import Iterator, Optional


class LineBuffer:
    """Ordered sequence of text lines.

    The buffer is never empty: it always holds at least one (possibly empty)
    line. Row and column arguments outside the current bounds are programming
    errors and trip an assertion rather than raising a catchable error.
    """

    def __init__(self, lines: Optional[list[str]] = None):
        self._lines: list[str] = list(lines) if lines else [""]

    @classmethod
    def load(cls, text: str) -> "LineBuffer":
        """Build a buffer from raw text, splitting on newline boundaries.

        A trailing newline terminates the last line rather than opening a new
        one, and a carriage return before a newline is dropped. Empty input
        yields a single empty line.
        """
        lines = text.split('\n')
        if text.endswith('\n'):
            lines.pop()
        return cls([line[:-1] if line.endswith('\r') else line for line in lines])

    def serialize(self) -> str:
        """Join lines with newlines, ending in exactly one trailing newline."""
        return '\n'.join(self._lines) + '\n'

    # --- Read accessors ---

    def line_count(self) -> int:
        return len(self._lines)

    def line_len(self, row: int) -> int:
        self._check_row(row)
        return len(self._lines[row])

    def line_text(self, row: int) -> str:
        self._check_row(row)
        return self._lines[row]

    @property
    def lines(self) -> list[str]:
        """Copy of the current lines."""
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def _check_row(self, row: int) -> None:
        assert 0 <= row < len(self._lines), f"row {row} out of range (0..{len(self._lines) - 1})"

    def _check_col(self, row: int, col: int) -> None:
        self._check_row(row)
        assert 0 <= col <= len(self._lines[row]), f"col {col} out of range for row {row}"

    # --- Mutation primitives ---

    def insert_text(self, row: int, col: int, text: str) -> None:
        """Insert text (without newlines) into a line at the given column."""
        assert '\n' not in text, "use split_line to insert line breaks"
        self._check_col(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col] + text + line[col:]

    def delete_span(self, row: int, start: int, end: int) -> str:
        """Remove characters [start, end) from a line and return them."""
        self._check_col(row, start)
        self._check_col(row, end)
        assert start <= end
        line = self._lines[row]
        self._lines[row] = line[:start] + line[end:]
        return line[start:end]

    def split_line(self, row: int, col: int) -> None:
        """Split a line at col; the tail becomes a new line right after it."""
        self._check_col(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def join_with_previous(self, row: int) -> int:
        """Append line `row` onto line `row - 1` and remove it.

        Returns:
            Length of the previous line before the join, i.e. the join column.
        """
        self._check_row(row)
        assert row > 0, "first line has no previous line"
        join_col = len(self._lines[row - 1])
        self._lines[row - 1] += self._lines[row]
        del self._lines[row]
        return join_col

    def remove_line(self, row: int) -> bool:
        """Delete a line unless it is the only one.

        Returns:
            True if the line was removed.
        """
        self._check_row(row)
        if len(self._lines) == 1:
            return False
        del self._lines[row]
        return True
