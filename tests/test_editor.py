"""Tests for the Sublime Text command line wrapper."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from easy_ws_git.core.editor import SublimeEditor
from easy_ws_git.core.errors import EditorError

SUBL = "/usr/local/bin/subl"


@pytest.fixture
def mock_subl():
    """Pretend subl is installed and capture its invocations."""
    with patch("easy_ws_git.core.editor.shutil.which", return_value=SUBL), patch(
        "easy_ws_git.core.editor.subprocess.run"
    ) as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 0)
        yield mock_run


def test_open_window(mock_subl):
    """Test a new window is requested with -n."""
    SublimeEditor().open_window(Path("/work/repo"))

    mock_subl.assert_called_once_with([SUBL, "-n", "/work/repo"], check=False)


def test_open_blocking_waits(mock_subl):
    """Test blocking views pass -w and every path."""
    SublimeEditor().open_blocking([Path("/work/repo/a.py"), Path("/tmp/msg.txt")])

    mock_subl.assert_called_once_with(
        [SUBL, "-w", "/work/repo/a.py", "/tmp/msg.txt"], check=False
    )


def test_run_command_encodes_arguments(mock_subl):
    """Test plugin command arguments are sent as JSON."""
    SublimeEditor().run_command(
        "open_easy_workspace", {"filename": 'repo/feature-"quoted"'}
    )

    mock_subl.assert_called_once_with(
        [
            SUBL,
            "--command",
            'open_easy_workspace {"filename": "repo/feature-\\"quoted\\""}',
        ],
        check=False,
    )


def test_run_command_without_arguments(mock_subl):
    """Test a bare command name is passed through."""
    SublimeEditor().run_command("new_window")

    mock_subl.assert_called_once_with([SUBL, "--command", "new_window"], check=False)


def test_missing_executable():
    """Test a missing editor raises EditorError before running anything."""
    with patch("easy_ws_git.core.editor.shutil.which", return_value=None), patch(
        "easy_ws_git.core.editor.subprocess.run"
    ) as mock_run:
        with pytest.raises(EditorError, match="not found: subl"):
            SublimeEditor().open_window(Path("/work/repo"))

    mock_run.assert_not_called()


def test_nonzero_exit(mock_subl):
    """Test a failing editor raises EditorError."""
    mock_subl.return_value = subprocess.CompletedProcess([], 2)

    with pytest.raises(EditorError, match="status 2"):
        SublimeEditor().open_blocking([Path("/tmp/msg.txt")])


def test_custom_executable():
    """Test the executable name is looked up on PATH."""
    with patch(
        "easy_ws_git.core.editor.shutil.which", return_value="/opt/st/sublime_text"
    ) as mock_which, patch("easy_ws_git.core.editor.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 0)
        SublimeEditor("sublime_text").open_window(Path("/work"))

    mock_which.assert_called_once_with("sublime_text")
    assert mock_run.call_args[0][0][0] == "/opt/st/sublime_text"


def test_open_window_does_not_wait(mock_subl):
    """Test a new window is requested without -w and failures are raised."""
    SublimeEditor().open_window(Path("/work/repo"))

    assert "-w" not in mock_subl.call_args[0][0]

    mock_subl.return_value = subprocess.CompletedProcess([], 1)
    with pytest.raises(EditorError, match="status 1"):
        SublimeEditor().open_window(Path("/work/repo"))
