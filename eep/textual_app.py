"""Textual frontend: drives the same Editor and renders its frames in a Textual app."""

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .editor import Editor
from .frame import Frame
from .keyboard import KeyEvent, KeyType, MouseEvent, ScrollDirection

_SPECIAL_KEYS = {
    'escape', 'enter', 'backspace', 'delete',
    'up', 'down', 'left', 'right', 'home', 'end', 'pageup', 'pagedown',
}


def key_event_from_textual(key: str, character: Optional[str]) -> Optional[KeyEvent]:
    """Translate a Textual key name and character into a KeyEvent.

    Returns None for keys the editor has no use for.
    """
    if key == 'tab':
        return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
    if key in ('ctrl+h',):
        return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key)
    if key in ('ctrl+j', 'ctrl+m'):
        return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key)
    if key in _SPECIAL_KEYS:
        return KeyEvent(key_type=KeyType.SPECIAL, value=key, raw=key, is_sequence=True)
    if key.startswith('ctrl+') and len(key) == len('ctrl+') + 1:
        return KeyEvent(key_type=KeyType.CTRL, value=key[-1], raw=key, is_ctrl=True)
    if character and character.isprintable():
        return KeyEvent(key_type=KeyType.REGULAR, value=character, raw=character)
    return None


def frame_to_text(frame: Frame) -> Text:
    """Convert a frame to rich Text, marking the cursor cell in reverse video."""
    lines = [Text.from_ansi(row) for row in frame.rows]
    lines.append(Text.from_ansi(frame.status_bar))
    if 0 <= frame.cursor_row < len(frame.rows):
        line = lines[frame.cursor_row]
        if frame.cursor_col >= len(line):
            line.append(' ' * (frame.cursor_col - len(line) + 1))
        line.stylize("reverse", frame.cursor_col, frame.cursor_col + 1)
    return Text("\n", no_wrap=True).join(lines)


class EditorView(Static, can_focus=True):
    """Displays the editor's frame and feeds it keyboard and wheel input."""

    def __init__(self, editor: Editor):
        super().__init__()
        self.editor = editor

    def refresh_frame(self) -> None:
        self.update(frame_to_text(self.editor.render_frame()))

    def _after_event(self) -> None:
        if self.editor.running:
            self.refresh_frame()
        else:
            self.app.exit()

    def on_key(self, event: events.Key) -> None:
        key_event = key_event_from_textual(event.key, event.character)
        if key_event is None:
            return
        # Keep Textual from using tab and friends for focus changes
        event.prevent_default()
        event.stop()
        self.editor.handle_key_event(key_event)
        self._after_event()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.editor.handle_mouse_event(MouseEvent(ScrollDirection.UP))
        self._after_event()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.editor.handle_mouse_event(MouseEvent(ScrollDirection.DOWN))
        self._after_event()


class EepApp(App):
    """Textual app hosting a single EditorView."""

    CSS = """
    EditorView {
        width: 100%;
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, editor: Optional[Editor] = None):
        super().__init__()
        self.editor = editor or Editor()
        self.view: Optional[EditorView] = None

    def compose(self) -> ComposeResult:
        self.view = EditorView(self.editor)
        yield self.view

    def on_mount(self) -> None:
        self.editor.running = True
        self.editor.resize(self.size.width, self.size.height)
        self.view.focus()
        self.view.refresh_frame()

    def on_resize(self, event: events.Resize) -> None:
        self.editor.resize(event.size.width, event.size.height)
        if self.view is not None:
            self.view.refresh_frame()


def run_textual(editor: Editor) -> None:
    """Run the editor under Textual until it quits."""
    EepApp(editor).run()
