"""Tests for the external editor adapter."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from orgdiary.adapters.editor import ExternalEditor, cursor_args
from orgdiary.core.outline import Location


@pytest.fixture
def location():
    return Location(path=Path("/j/2025-06.org"), offset=120, line=8, column=9)


class TestCursorArgs:
    def test_vim(self, location):
        assert cursor_args("/usr/bin/vim", location) == ["+call cursor(8, 9)", "/j/2025-06.org"]

    def test_vim_uses_byte_column(self):
        location = Location(path=Path("/j/2025-06.org"), offset=40, line=8, column=13, byte_column=14)
        assert cursor_args("nvim", location) == ["+call cursor(8, 14)", "/j/2025-06.org"]
        assert cursor_args("emacs", location) == ["+8:13", "/j/2025-06.org"]

    def test_emacs(self, location):
        assert cursor_args("emacsclient", location) == ["+8:9", "/j/2025-06.org"]

    def test_nano(self, location):
        assert cursor_args("nano", location) == ["+8,9", "/j/2025-06.org"]

    def test_vscode(self, location):
        assert cursor_args("code", location) == ["--wait", "--goto", "/j/2025-06.org:8:9"]

    def test_unknown_editor_gets_line_only(self, location):
        assert cursor_args("ed", location) == ["+8", "/j/2025-06.org"]


class TestExternalEditor:
    def test_keeps_editor_arguments(self, location):
        editor = ExternalEditor("emacsclient -t")
        assert editor.build_command(location) == ["emacsclient", "-t", "+8:9", "/j/2025-06.org"]

    @patch("orgdiary.adapters.editor.subprocess.run")
    def test_open_runs_editor(self, mock_run, location):
        mock_run.return_value = MagicMock(returncode=0)

        ExternalEditor("nano").open(location)

        mock_run.assert_called_once_with(["nano", "+8,9", "/j/2025-06.org"])

    @patch("orgdiary.adapters.editor.subprocess.run")
    def test_missing_editor(self, mock_run, location):
        mock_run.side_effect = FileNotFoundError()

        with pytest.raises(RuntimeError, match="Editor not found"):
            ExternalEditor("nosuchedit").open(location)

    @patch("orgdiary.adapters.editor.subprocess.run")
    def test_editor_failure(self, mock_run, location):
        mock_run.return_value = MagicMock(returncode=2)

        with pytest.raises(RuntimeError, match="status 2"):
            ExternalEditor("vim").open(location)

    def test_empty_command(self, location):
        with pytest.raises(RuntimeError, match="No editor"):
            ExternalEditor("  ").build_command(location)
