"""Constants and configuration for the eep editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    RESERVED_ROWS = 2  # Status bar + command/message row below the content area
    GUTTER_PADDING = 2  # Blank columns between line numbers and text
    MIN_VISIBLE_ROWS = 1
    MIN_VISIBLE_COLS = 1

    # Editing
    TAB_WIDTH = 4  # Spaces inserted for a tab character
    SCROLL_STEP = 3  # Cursor lines moved per mouse wheel notch

    # File operations
    ENCODING = "utf-8"
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status bar styling (SGR sequences)
    ESC = "\x1b"
    RESET = "\x1b[0m"
    STATUS_FILENAME_STYLE = "\x1b[38;5;231m"  # White text
    STATUS_MODE_STYLE = "\x1b[38;5;213m"  # Pink text
    STATUS_MSG_STYLE = "\x1b[38;5;220m\x1b[49m"  # Yellow text, default background
    STATUS_CMD_STYLE = "\x1b[38;5;117m\x1b[49m"  # Light blue text, default background
    STATUS_INFO_STYLE = "\x1b[38;5;255m\x1b[49m"  # Light gray text, default background
    GUTTER_STYLE = "\x1b[90m"  # Dim line numbers

    # Cursor shapes (DECSCUSR)
    CURSOR_BLOCK = "\x1b[2 q"
    CURSOR_BAR = "\x1b[6 q"
    CURSOR_DEFAULT = "\x1b[0 q"

    # Mouse reporting (xterm normal tracking + SGR extended coordinates)
    MOUSE_ENABLE = "\x1b[?1000h\x1b[?1006h"
    MOUSE_DISABLE = "\x1b[?1006l\x1b[?1000l"
    MOUSE_REPORT_TIMEOUT = 0.05  # Wait for the rest of a split mouse report (seconds)

    # Status messages
    NO_NAME = "[No Name]"
    MODIFIED_MARKER = " [+]"
    SAVED_MESSAGE = "Saved '{}'"
    SAVE_ERROR_MESSAGE = "Error saving file: {}"
    NO_FILENAME_MESSAGE = "No filename specified. Use :w <filename>"
    UNKNOWN_COMMAND_MESSAGE = "Unknown command: {}"
    UNDO_STUB_MESSAGE = "Undo not implemented yet"
    SEARCH_STUB_MESSAGE = "Search not implemented yet"
