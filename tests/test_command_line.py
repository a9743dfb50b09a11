"""Tests for the command line buffer and interpreter."""

import os
import tempfile
from unittest.mock import Mock

from eep.command_line import CommandLine, execute_command_line
from eep.editor import Editor


def create_mock_editor(save_result=True):
    editor = Mock()
    editor.save.return_value = save_result
    editor.filename = None
    return editor


def test_command_line_buffer():
    command_line = CommandLine()
    command_line.append("w")
    command_line.append("q")
    assert command_line.text == "wq"
    assert str(command_line) == "wq"
    assert len(command_line) == 2
    command_line.pop()
    assert command_line.text == "w"
    command_line.clear()
    assert command_line.text == ""


def test_pop_on_empty_buffer_is_safe():
    command_line = CommandLine()
    command_line.pop()
    assert len(command_line) == 0


def test_q_quits():
    editor = create_mock_editor()
    assert execute_command_line(editor, "q") is True
    editor.quit.assert_called_once()
    editor.save.assert_not_called()


def test_w_saves():
    editor = create_mock_editor()
    assert execute_command_line(editor, "w") is True
    editor.save.assert_called_once()
    editor.quit.assert_not_called()


def test_wq_saves_then_quits():
    editor = create_mock_editor()
    assert execute_command_line(editor, "wq") is True
    editor.save.assert_called_once()
    editor.quit.assert_called_once()


def test_wq_does_not_quit_when_save_fails():
    editor = create_mock_editor(save_result=False)
    assert execute_command_line(editor, "wq") is False
    editor.quit.assert_not_called()


def test_w_with_path_sets_filename():
    editor = create_mock_editor()
    execute_command_line(editor, "w notes.txt")
    assert editor.filename == "notes.txt"
    editor.save.assert_called_once()


def test_command_is_trimmed():
    editor = create_mock_editor()
    execute_command_line(editor, "  wq ")
    editor.quit.assert_called_once()


def test_unknown_command_sets_status():
    editor = create_mock_editor()
    assert execute_command_line(editor, "frobnicate") is False
    editor.set_status.assert_called_once_with("Unknown command: frobnicate")


def test_set_line_numbers():
    editor = create_mock_editor()
    execute_command_line(editor, "set nonu")
    editor.set_line_numbers.assert_called_with(False)
    execute_command_line(editor, "set nu")
    editor.set_line_numbers.assert_called_with(True)


def test_w_without_filename_reports_error():
    """A real editor with no filename cannot save."""
    editor = Editor()
    assert execute_command_line(editor, "w") is False
    assert editor.status.status_message == "No filename specified. Use :w <filename>"


def test_w_path_writes_file():
    editor = Editor()
    editor.model.insert_char("x")
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "out.txt")
        assert execute_command_line(editor, f"w {path}") is True
        with open(path, encoding="utf-8") as f:
            assert f.read() == "x\n"
        assert editor.status.status_message == f"Saved '{path}'"
