"""Modal key dispatch: command objects looked up by (mode, key type, key value)."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import KeyType
from .model import Direction

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorMode(Enum):
    """Modal editing state; the value is the name shown in the status bar."""
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    COMMAND = "COMMAND"


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class MoveCommand(MovementCommand):
    def __init__(self, direction: Direction):
        self.direction = direction

    def _move(self, editor, key_event):
        editor.model.move(self.direction)


class LineStartCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_to_line_start()


class LineEndCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_to_line_end()


class BufferStartCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_to_buffer_start()


class BufferEndCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_to_buffer_end()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands report whether the text actually changed."""
        return self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit; return False if it was a no-op."""
        pass


class InsertCharCommand(EditCommand):
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        # Filter out control characters other than tab
        char = key_event.value
        if len(char) != 1 or (ord(char) < 32 and char != '\t'):
            return False
        return super().execute(editor, key_event)

    def _edit(self, editor, key_event):
        editor.model.insert_char(key_event.value)
        return True


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.model.delete_char()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.insert_newline()
        return True


class DeleteCharForwardCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.model.delete_char_forward()


class DeleteLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.model.delete_line()


class SystemCommand(EditorCommand):
    """Base class for mode transitions and other commands that leave the text alone."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class EnterInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.mode = EditorMode.INSERT


class EnterCommandModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.command_line.clear()
        # The command line view replaces any pending message
        editor.status.status_message = None
        editor.status.show_command = True
        editor.mode = EditorMode.COMMAND


class EscapeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.mode == EditorMode.COMMAND:
            editor.command_line.clear()
            editor.status.show_command = False
        editor.mode = EditorMode.NORMAL


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.quit()


class StatusStubCommand(SystemCommand):
    """Binding that only reports a fixed status message."""

    def __init__(self, message: str):
        self.message = message

    def _execute_system(self, editor, key_event):
        editor.set_status(self.message)


class CommandCharCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        char = key_event.value
        if len(char) == 1 and ord(char) >= 32:
            editor.command_line.append(char)


class CommandBackspaceCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.command_line.pop()


class CommandEnterCommand(SystemCommand):
    """Dispatch the command line, then always return to Normal mode."""

    def _execute_system(self, editor, key_event):
        text = editor.command_line.text
        editor.command_line.clear()
        editor.status.show_command = False
        editor.mode = EditorMode.NORMAL
        editor.run_command(text)


DispatchKey = Tuple[EditorMode, KeyType, Optional[str]]


class ModeDispatcher:
    """Dispatch table mapping (mode, key type, key value) to commands.

    A value of None registers a fallback for every key of that type in that
    mode (e.g. any printable character in Insert mode).
    """

    def __init__(self):
        self._commands: Dict[DispatchKey, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        normal, insert, command = EditorMode.NORMAL, EditorMode.INSERT, EditorMode.COMMAND
        special, regular = KeyType.SPECIAL, KeyType.REGULAR

        # Mode transitions
        self.register((normal, regular, ':'), EnterCommandModeCommand())
        self.register((normal, regular, 'i'), EnterInsertModeCommand())
        self.register((normal, regular, 'q'), QuitCommand())
        for mode in EditorMode:
            self.register((mode, special, 'escape'), EscapeCommand())

        # Normal mode single-character commands
        self.register((normal, regular, 'h'), MoveCommand(Direction.LEFT))
        self.register((normal, regular, 'j'), MoveCommand(Direction.DOWN))
        self.register((normal, regular, 'k'), MoveCommand(Direction.UP))
        self.register((normal, regular, 'l'), MoveCommand(Direction.RIGHT))
        self.register((normal, regular, '0'), LineStartCommand())
        self.register((normal, regular, '$'), LineEndCommand())
        self.register((normal, regular, 'G'), BufferEndCommand())
        self.register((normal, regular, 'g'), BufferStartCommand())
        self.register((normal, regular, 'x'), DeleteCharForwardCommand())
        self.register((normal, regular, 'd'), DeleteLineCommand())
        self.register((normal, regular, 'u'), StatusStubCommand(EditorConstants.UNDO_STUB_MESSAGE))
        self.register((normal, regular, '/'), StatusStubCommand(EditorConstants.SEARCH_STUB_MESSAGE))

        # Arrow keys move the cursor outside Command mode
        for mode in (normal, insert):
            self.register((mode, special, 'up'), MoveCommand(Direction.UP))
            self.register((mode, special, 'down'), MoveCommand(Direction.DOWN))
            self.register((mode, special, 'left'), MoveCommand(Direction.LEFT))
            self.register((mode, special, 'right'), MoveCommand(Direction.RIGHT))

        # Insert mode
        self.register((insert, regular, None), InsertCharCommand())
        self.register((insert, special, 'backspace'), BackspaceCommand())
        self.register((insert, special, 'enter'), InsertNewlineCommand())

        # Command mode
        self.register((command, regular, None), CommandCharCommand())
        self.register((command, special, 'backspace'), CommandBackspaceCommand())
        self.register((command, special, 'enter'), CommandEnterCommand())

    def register(self, key: DispatchKey, command: EditorCommand):
        """Register a command for a (mode, key type, value) combination."""
        self._commands[key] = command

    def get_command(self, mode: EditorMode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key in a mode, falling back to the per-type entry."""
        command = self._commands.get((mode, key_type, value))
        if command is None:
            command = self._commands.get((mode, key_type, None))
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command bound to the key in the editor's current mode.

        Returns:
            True if the document was modified
        """
        command = self.get_command(editor.mode, key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)
        return False
