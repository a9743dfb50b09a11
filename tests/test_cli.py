"""Tests for command-line argument handling."""

import sys
from unittest.mock import patch

import pytest

from eep import __main__ as cli


def test_parse_args():
    assert cli.parse_args([]) == (set(), None)
    assert cli.parse_args(["--log", "notes.txt"]) == ({"--log"}, "notes.txt")
    with pytest.raises(ValueError):
        cli.parse_args(["--bogus"])
    with pytest.raises(ValueError):
        cli.parse_args(["a.txt", "b.txt"])


def test_version_flag(capsys):
    with patch.object(sys, "argv", ["eep", "--version"]):
        cli.main()
    assert capsys.readouterr().out.startswith("eep ")


def test_unreadable_file_exits_with_error(capsys, tmp_path):
    """A file that exists but cannot be read aborts startup."""
    with patch.object(sys, "argv", ["eep", str(tmp_path)]), \
            patch("eep.logging_config.configure_logging", return_value=None), \
            patch("eep.editor.Editor.run") as run:
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
    assert exc_info.value.code == 1
    assert "Failed to open" in capsys.readouterr().err
    run.assert_not_called()


def test_missing_file_starts_editor(tmp_path):
    path = tmp_path / "new.txt"
    with patch.object(sys, "argv", ["eep", str(path)]), \
            patch("eep.logging_config.configure_logging", return_value=None), \
            patch("eep.settings.SettingsStore.load") as load, \
            patch("eep.editor.Editor.run") as run:
        from eep.settings import EditorSettings
        load.return_value = EditorSettings()
        cli.main()
    run.assert_called_once()
