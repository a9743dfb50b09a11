"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
from typing import Optional

import blessed

from .constants import EditorConstants
from .frame import Frame
from .modes import EditorMode

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    The terminal is a scoped resource: use it as a context manager so the
    alternate screen, mouse reporting and raw input are always released,
    including when the editor loop raises.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, mouse_capture: bool = True):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.mouse_capture = mouse_capture
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Virtual screen state for minimal updates
        self._last_rows: list[Optional[str]] | None = None
        self._last_status: str | None = None
        self._last_size: tuple[int, int] | None = None
        self._last_mode: EditorMode | None = None

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.cleanup()
        return False

    def setup(self):
        """Enter fullscreen mode, enable mouse reporting and start raw input."""
        out = self.term.enter_fullscreen + self.term.clear
        if self.mouse_capture:
            out += EditorConstants.MOUSE_ENABLE
        print(out, end='', flush=True)
        self.is_fullscreen = True
        self.invalidate_frame()
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            try:
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
            except Exception:
                self._curtsies_input = None
                self.cleanup()
                raise

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown continues so the screen is still restored
                logger.warning(f"Failed to leave raw input mode: {e}")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            out = EditorConstants.CURSOR_DEFAULT
            if self.mouse_capture:
                out += EditorConstants.MOUSE_DISABLE
            out += self.term.exit_fullscreen + self.term.normal_cursor
            print(out, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Invalidate cached frame so next update does a full clear."""
        self._last_rows = None
        self._last_status = None
        self._last_size = None
        self._last_mode = None

    def draw_frame(self, frame: Frame) -> None:
        """Diff against last frame and write only changes.

        Falls back to a full clear on first paint or when geometry changes.
        """
        size = (frame.width, frame.height)
        need_full_clear = (
            self._last_rows is None
            or self._last_size != size
            or len(self._last_rows) != len(frame.rows)
        )

        out: list[str] = []
        if need_full_clear:
            out.append(self.term.home + self.term.clear)
            self._last_rows = [None] * len(frame.rows)
            self._last_status = None
            self._last_size = size

        for y, row in enumerate(frame.rows):
            if row != self._last_rows[y]:
                out.append(self.term.move(y, 0) + row)
                self._last_rows[y] = row

        if frame.status_bar != self._last_status:
            out.append(self.term.move(frame.status_row, 0) + frame.status_bar)
            self._last_status = frame.status_bar

        if frame.mode != self._last_mode:
            shape = EditorConstants.CURSOR_BAR if frame.mode == EditorMode.INSERT else EditorConstants.CURSOR_BLOCK
            out.append(shape)
            self._last_mode = frame.mode

        out.append(self.term.move(frame.cursor_row, frame.cursor_col) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None on timeout.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            evt = next(self._curtsies_input)  # blocks
            return str(evt)
        # send() also sees bytes curtsies has read but not yet tokenized
        evt = self._curtsies_input.send(0.0 if timeout == 0 else float(timeout))
        return str(evt) if evt is not None else None

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self) -> int:
        """Terminal height in rows (status rows included)."""
        return self.term.height
