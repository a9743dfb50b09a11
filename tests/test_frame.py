"""Tests for frame composition and the status bar."""

from eep.ansi import RESET, strip_escapes, visible_length
from eep.command_line import CommandLine, StatusState
from eep.constants import EditorConstants
from eep.frame import FrameComposer, compute_layout, number_width
from eep.model import CursorPosition, TextModel
from eep.modes import EditorMode
from eep.view import Viewport


def compose(model, width=40, height=10, show_line_numbers=True, mode=EditorMode.NORMAL,
            status=None, command_line=None, filename="x", viewport=None):
    """Compose a frame the way the editor does, reconciling the viewport first."""
    composer = FrameComposer(show_line_numbers=show_line_numbers)
    layout = composer.layout(width, height, model.buffer.line_count())
    if viewport is None:
        viewport = Viewport(layout.visible_rows, layout.visible_cols)
        viewport.reconcile(model.cursor_position)
    return composer.compose(model, viewport, mode, status or StatusState(),
                            command_line or CommandLine(), filename, width, height)


def test_status_bar_width_20_is_exactly_20():
    """Left and right segments overflow 20 columns; the bar is cut to fit."""
    composer = FrameComposer()
    bar = composer.build_status_bar(TextModel(), EditorMode.NORMAL, StatusState(),
                                    CommandLine(), "x", 20)
    assert visible_length(bar) == 20
    assert bar.endswith(RESET)


def test_status_bar_segments():
    model = TextModel(lines=["abc", "de"])
    model.cursor_position = CursorPosition(1, 1)
    bar = FrameComposer().build_status_bar(model, EditorMode.INSERT, StatusState(),
                                           CommandLine(), "notes.txt", 60)
    text = strip_escapes(bar)
    assert text.startswith("notes.txt -- INSERT -- ")
    assert text.rstrip().endswith("Ln 2/2 Col 2")
    assert visible_length(bar) == 60


def test_status_bar_no_name():
    bar = FrameComposer().build_status_bar(TextModel(), EditorMode.NORMAL, StatusState(),
                                           CommandLine(), None, 60)
    assert strip_escapes(bar).startswith("[No Name] -- NORMAL -- ")


def test_status_bar_shows_message():
    status = StatusState(status_message="Saved 'x'")
    bar = FrameComposer().build_status_bar(TextModel(), EditorMode.NORMAL, status,
                                           CommandLine(), "x", 60)
    assert "Saved 'x'" in strip_escapes(bar)


def test_command_line_takes_priority_over_message():
    status = StatusState(status_message="old message", show_command=True)
    command_line = CommandLine()
    for ch in "wq":
        command_line.append(ch)
    bar = FrameComposer().build_status_bar(TextModel(), EditorMode.COMMAND, status,
                                           command_line, "x", 60)
    text = strip_escapes(bar)
    assert ":wq" in text
    assert "old message" not in text


def test_long_message_is_truncated_with_reset():
    """A message wider than the free space is cut without breaking the width."""
    status = StatusState(status_message="m" * 100)
    bar = FrameComposer().build_status_bar(TextModel(), EditorMode.NORMAL, status,
                                           CommandLine(), "x", 50)
    assert visible_length(bar) == 50
    assert "m" * 10 in strip_escapes(bar)


def test_layout_gutter_width():
    """Gutter is the digit count of the last line number plus two."""
    assert number_width(9) == 1
    assert number_width(10) == 2
    assert number_width(0) == 1
    layout = compute_layout(80, 24, 120, show_line_numbers=True)
    assert layout.gutter_width == 5
    assert layout.visible_cols == 75
    assert layout.visible_rows == 22
    layout = compute_layout(80, 24, 120, show_line_numbers=False)
    assert layout.gutter_width == 0
    assert layout.visible_cols == 80


def test_rows_have_gutter_and_full_width():
    model = TextModel(lines=["hello", "world"])
    frame = compose(model, width=20, height=6)
    assert len(frame.rows) == 4
    assert strip_escapes(frame.rows[0]) == "1  hello".ljust(20)
    assert strip_escapes(frame.rows[1]) == "2  world".ljust(20)
    assert EditorConstants.GUTTER_STYLE in frame.rows[0]
    for row in frame.rows:
        assert visible_length(row) == 20


def test_rows_past_end_of_document_are_blank():
    frame = compose(TextModel(lines=["a"]), width=10, height=6)
    assert frame.rows[1:] == [" " * 10] * 3


def test_rows_without_line_numbers():
    frame = compose(TextModel(lines=["abc"]), width=10, height=4, show_line_numbers=False)
    assert frame.rows[0] == "abc".ljust(10)


def test_cursor_cell_includes_gutter():
    model = TextModel(lines=["hello"])
    model.cursor_position = CursorPosition(0, 4)
    frame = compose(model, width=20, height=6)
    assert (frame.cursor_row, frame.cursor_col) == (0, 7)


def test_horizontal_scroll_clips_line():
    model = TextModel(lines=["0123456789abcdef"])
    model.move_to_line_end()
    frame = compose(model, width=10, height=4, show_line_numbers=False)
    assert frame.rows[0] == "789abcdef "
    assert frame.cursor_col == 9


def test_cursor_row_is_clamped_to_screen():
    """Without reconciliation the cursor row still stays on screen."""
    model = TextModel(lines=[str(i) for i in range(20)])
    model.cursor_position = CursorPosition(15, 0)
    frame = compose(model, width=20, height=6, viewport=Viewport(4, 17))
    assert frame.cursor_row == 3


def test_status_row_follows_content_rows():
    frame = compose(TextModel(), width=20, height=10)
    assert frame.status_row == 8
    assert visible_length(frame.status_bar) == 20


def test_narrow_terminal_rows_fit_width():
    """A gutter wider than the terminal is clipped, never wrapped."""
    model = TextModel(lines=[f"line {i}" for i in range(1000)])
    frame = compose(model, width=4, height=6)
    assert [visible_length(row) for row in frame.rows] == [4, 4, 4, 4]
    assert 0 <= frame.cursor_col < 4
    assert visible_length(frame.status_bar) == 4


def test_cursor_col_clamped_when_gutter_fills_screen():
    model = TextModel(lines=["abc"] * 100)
    model.move_to_line_end()
    frame = compose(model, width=3, height=5)
    assert frame.cursor_col == 2


def test_control_characters_are_not_sent_to_terminal():
    """ESC and other control bytes in the document show as '?'."""
    model = TextModel(lines=["a\x1b[2Jb\x07c"])
    frame = compose(model, width=20, height=4, show_line_numbers=False)
    assert frame.rows[0] == "a?[2Jb?c".ljust(20)
    assert "\x1b" not in frame.rows[0]


def test_control_characters_keep_columns():
    model = TextModel(lines=["\x01\x02xyz"])
    model.move_to_line_end()
    frame = compose(model, width=10, height=4, show_line_numbers=False)
    assert frame.rows[0].index("z") == 4
    assert frame.cursor_col == 5


def test_modified_marker():
    composer = FrameComposer()
    bar = composer.build_status_bar(TextModel(), EditorMode.NORMAL, StatusState(),
                                    CommandLine(), "x.txt", 60, modified=True)
    assert strip_escapes(bar).startswith("x.txt [+] -- NORMAL -- ")
    bar = composer.build_status_bar(TextModel(), EditorMode.NORMAL, StatusState(),
                                    CommandLine(), "x.txt", 60)
    assert "[+]" not in strip_escapes(bar)
