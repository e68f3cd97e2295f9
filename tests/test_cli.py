"""Tests for the CLI entry point."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from orgdiary.cli import main


@pytest.fixture
def conf(tmp_path):
    path = tmp_path / "orgdiary.conf"
    path.write_text(f"journal_dir = {tmp_path / 'journal'}\n")
    return path


@pytest.fixture
def journal_file(tmp_path):
    return tmp_path / "journal" / "2025-06.org"


def run(conf, *args, **kwargs):
    return CliRunner().invoke(main, ["--config", str(conf), *args], **kwargs)


class TestCliGroup:
    def test_help_lists_commands(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("new", "last", "today", "prev", "next", "goto", "calendar", "path"):
            assert command in result.output

    def test_bad_config_exits(self, tmp_path):
        conf = tmp_path / "bad.conf"
        conf.write_text("date_heading_format = * %B\n")
        result = run(conf, "today", "--no-edit")
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestNewCommand:
    def test_prints_location(self, conf, journal_file):
        result = run(conf, "new", "--at", "2025-06-15 09:30", "--no-edit")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == f"{journal_file}:8:9"
        assert "** 0930 \n" in journal_file.read_text()

    def test_message_skips_editor(self, conf, journal_file):
        with patch("orgdiary.cli.get_editor") as mock_get_editor:
            result = run(conf, "new", "--at", "2025-06-15 14:05", "-m", "Lunch")

        assert result.exit_code == 0, result.output
        mock_get_editor.assert_not_called()
        assert journal_file.read_text().endswith("** 1405 Lunch\n")

    def test_opens_editor(self, conf, journal_file):
        editor = MagicMock()
        with patch("orgdiary.cli.get_editor", return_value=editor):
            result = run(conf, "new", "--at", "2025-06-15 09:30")

        assert result.exit_code == 0, result.output
        (location,), _ = editor.open.call_args
        assert location.path == journal_file
        assert (location.line, location.column) == (8, 9)

    def test_editor_failure_exits(self, conf):
        editor = MagicMock()
        editor.open.side_effect = RuntimeError("Editor not found: nope")
        with patch("orgdiary.cli.get_editor", return_value=editor):
            result = run(conf, "new", "--at", "2025-06-15 09:30")

        assert result.exit_code == 1
        assert "Editor not found" in result.output


class TestNavigationCommands:
    def test_goto(self, conf, journal_file):
        result = run(conf, "goto", "2025-06-20", "--no-edit")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == f"{journal_file}:3:1"
        assert "* Friday, 20 June\n" in journal_file.read_text()

    def test_prev_and_next_from(self, conf, journal_file):
        assert run(conf, "prev", "--from", "2025-06-15", "--no-edit").exit_code == 0
        assert run(conf, "next", "--from", "2025-06-15", "--no-edit").exit_code == 0

        content = journal_file.read_text()
        assert content.index("* Saturday, 14 June") < content.index("* Monday, 16 June")

    def test_last_falls_back_to_new_entry(self, conf, tmp_path):
        result = run(conf, "last", "--no-edit")

        assert result.exit_code == 0, result.output
        path, line, column = result.output.strip().rsplit(":", 2)
        assert path.startswith(str(tmp_path / "journal"))
        assert int(line) == 8

    def test_path(self, conf, journal_file):
        result = run(conf, "path", "2025-06-30")
        assert result.output.strip() == str(journal_file)
        assert not journal_file.exists()


class TestCalendarCommand:
    def test_select_and_open_day(self, conf, journal_file):
        result = run(conf, "calendar", "--month", "2025-06", "--no-edit", input="llj")

        assert result.exit_code == 0, result.output
        assert "June 2025" in result.output
        assert result.output.strip().endswith(f"{journal_file}:3:1")
        assert "* Tuesday, 03 June\n" in journal_file.read_text()

    def test_quit_opens_nothing(self, conf, journal_file):
        result = run(conf, "calendar", "--month", "2025-06", "--no-edit", input="q")

        assert result.exit_code == 0, result.output
        assert not journal_file.exists()
