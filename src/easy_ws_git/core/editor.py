"""Sublime Text command line integration.

Plugin commands such as ``open_easy_workspace`` only take effect when Sublime
Text is already running, since windows and plugins are not loaded otherwise.
"""

import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from easy_ws_git.core.errors import EditorError

logger = logging.getLogger(__name__)


class SublimeEditor:
    """Drives a running Sublime Text through the ``subl`` executable."""

    def __init__(self, executable: str = "subl"):
        self.executable = executable

    def _build_command(self, args: List[str]) -> List[str]:
        path = shutil.which(self.executable)
        if path is None:
            raise EditorError(f"Editor executable not found: {self.executable}")
        return [path] + args

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        cmd = self._build_command(args)
        logger.debug("Running %s", cmd)
        try:
            result = subprocess.run(cmd, check=False)  # noqa: S603
        except OSError as e:
            raise EditorError(f"Failed to start {self.executable}: {e}") from e
        if result.returncode != 0:
            raise EditorError(
                f"{self.executable} exited with status {result.returncode}"
            )
        return result

    def open_window(self, path: Path) -> None:
        """Open ``path`` in a new window without waiting for it to close."""
        self._run(["-n", str(path)])

    def open_blocking(self, paths: Sequence[Path]) -> None:
        """Open ``paths`` and wait until the reviewer closes them."""
        self._run(["-w"] + [str(p) for p in paths])

    def run_command(self, name: str, args: Optional[Dict[str, Any]] = None) -> None:
        """Run a window or plugin command, e.g. ``open_easy_workspace``."""
        command = name if args is None else f"{name} {json.dumps(args)}"
        self._run(["--command", command])
