"""Main editor controller."""

import logging
import os
import select
import signal
from typing import Optional

from .command_line import CommandLine, StatusState, execute_command_line
from .constants import EditorConstants
from .frame import Frame, FrameComposer
from .keyboard import InputEvent, KeyboardHandler, KeyEvent, KeyType, MouseEvent, ScrollDirection
from .model import TextModel
from .modes import EditorMode, ModeDispatcher
from .persistence import load_document, save_document
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import Viewport

logger = logging.getLogger(__name__)


class Editor:
    """Modal editor: owns the document, cursor, viewport, mode and status bar state.

    Input reaches the editor through handle_key_event() and
    handle_mouse_event(); render_frame() reconciles the viewport and returns
    the frame to draw. run() drives both against a real terminal.
    """

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None,
                 width: int = 80, height: int = 24):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal
        self.keyboard: Optional[KeyboardHandler] = None
        self.model = self._new_model()
        self.viewport = Viewport()
        self.composer = FrameComposer(show_line_numbers=self.settings.show_line_numbers)
        self.dispatcher = ModeDispatcher()  # (mode, key) -> command table
        self.mode = EditorMode.NORMAL
        self.command_line = CommandLine()
        self.status = StatusState()
        self.filename: Optional[str] = None
        self.modified = False
        self.running = False
        self.width = width
        self.height = height
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self._interrupted = False

    def _new_model(self) -> TextModel:
        return TextModel(
            backspace_mode=self.settings.backspace,
            tab_width=self.settings.tab_width,
            scroll_step=self.settings.scroll_step,
        )

    # --- Operations used by commands ---

    def set_status(self, message: str):
        """Replace the status message slot."""
        self.status.status_message = message

    def quit(self):
        self.running = False

    def set_line_numbers(self, enabled: bool):
        self.composer.show_line_numbers = enabled
        self.settings.show_line_numbers = enabled

    def toggle_line_numbers(self):
        self.set_line_numbers(not self.composer.show_line_numbers)

    def run_command(self, text: str) -> bool:
        """Hand a command line to the interpreter."""
        return execute_command_line(self, text)

    # --- Persistence ---

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty document that will be saved under
        that name. Other read errors propagate.
        """
        self.filename = filename
        try:
            buffer = load_document(filename)
        except FileNotFoundError:
            logger.info(f"{filename} does not exist; starting a new document")
            buffer = None
        self.model = self._new_model()
        if buffer is not None:
            self.model.buffer = buffer
        self.modified = False

    def save(self) -> bool:
        """Save to the current filename, reporting the outcome in the status bar.

        Returns:
            True if the document was written.
        """
        if not self.filename:
            self.set_status(EditorConstants.NO_FILENAME_MESSAGE)
            return False
        try:
            save_document(self.filename, self.model.buffer)
        except OSError as e:
            reason = e.strerror or str(e)
            logger.warning(f"Saving {self.filename} failed: {e}")
            self.set_status(EditorConstants.SAVE_ERROR_MESSAGE.format(reason))
            return False
        self.modified = False
        self.set_status(EditorConstants.SAVED_MESSAGE.format(self.filename))
        return True

    # --- Input entry points ---

    def handle_event(self, event: InputEvent):
        if isinstance(event, MouseEvent):
            self.handle_mouse_event(event)
        else:
            self.handle_key_event(event)

    def handle_key_event(self, key_event: KeyEvent):
        """Route a key to the command bound to it in the current mode."""
        was_modified = self.dispatcher.execute(self, key_event)
        if was_modified:
            self.modified = True

    def handle_mouse_event(self, mouse_event: MouseEvent):
        if mouse_event.direction == ScrollDirection.UP:
            self.model.scroll_up()
        else:
            self.model.scroll_down()

    # --- Rendering ---

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height

    def reconcile_viewport(self):
        """Size the viewport for the current screen and scroll it onto the cursor."""
        layout = self.composer.layout(self.width, self.height, self.model.buffer.line_count())
        self.viewport.resize(layout.visible_rows, layout.visible_cols)
        self.viewport.reconcile(self.model.cursor_position)

    def render_frame(self) -> Frame:
        """Fit the viewport to the screen, bring the cursor into view and compose a frame."""
        self.reconcile_viewport()
        return self.composer.compose(
            self.model,
            self.viewport,
            self.mode,
            self.status,
            self.command_line,
            self.filename,
            self.width,
            self.height,
            modified=self.modified,
        )

    # --- Terminal event loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) - treat as Escape."""
        del signum, frame  # Unused
        self._interrupted = True
        os.write(self._resize_pipe_w, b'C')

    def _draw(self):
        self.resize(self.terminal.width, self.terminal.height)
        self.terminal.draw_frame(self.render_frame())

    def run(self):
        """Run the main editor loop until a quit command."""
        if self.terminal is None:
            self.terminal = TerminalInterface(mouse_capture=self.settings.mouse_capture)
        if self.keyboard is None:
            self.keyboard = KeyboardHandler(self.terminal)
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        logger.info(f"Editor started ({self.filename or EditorConstants.NO_NAME})")

        try:
            with self.terminal:
                need_draw = True
                while self.running:
                    if need_draw:
                        self._draw()
                        need_draw = False

                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        os.read(self._resize_pipe_r, 1024)
                        if self._interrupted:
                            self._interrupted = False
                            self.handle_key_event(KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x03'))
                        else:
                            self.terminal.invalidate_frame()
                        need_draw = True
                    elif 0 in ready:
                        # Drain everything curtsies has buffered, drawing after each event
                        while self.running:
                            event = self.keyboard.get_event(timeout=0)
                            if event is None:
                                break
                            logger.debug(f"{self.mode.value}: {event}")
                            self.handle_event(event)
                            if self.running:
                                self._draw()
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            logger.info("Editor stopped")
