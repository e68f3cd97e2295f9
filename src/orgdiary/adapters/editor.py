"""External editor adapter - subprocess wrapper for $EDITOR."""

import logging
import shlex
import subprocess
from pathlib import Path

from ..core.outline import Location

logger = logging.getLogger(__name__)


def cursor_args(editor: str, location: Location) -> list[str]:
    """Command-line arguments that open ``location`` in the given editor."""
    name = Path(editor).name
    line, column = location.line, location.column
    path = str(location.path)

    if name in ("vi", "vim", "nvim", "gvim", "mvim"):
        # cursor() counts bytes, not characters
        byte_column = location.byte_column or column
        return [f"+call cursor({line}, {byte_column})", path]
    if name in ("emacs", "emacsclient"):
        return [f"+{line}:{column}", path]
    if name in ("nano", "pico"):
        return [f"+{line},{column}", path]
    if name in ("code", "codium"):
        return ["--wait", "--goto", f"{path}:{line}:{column}"]
    if name in ("subl", "zed"):
        return ["--wait", f"{path}:{line}:{column}"]
    return [f"+{line}", path]


class ExternalEditor:
    """
    Terminal editor subprocess adapter.

    Implements Editor protocol. ``command`` may carry its own arguments,
    e.g. ``"emacsclient -t"``.
    """

    def __init__(self, command: str):
        self.command = command

    def build_command(self, location: Location) -> list[str]:
        argv = shlex.split(self.command)
        if not argv:
            raise RuntimeError("No editor configured. Set EDITOR or 'editor' in orgdiary.conf")
        return argv + cursor_args(argv[0], location)

    def open(self, location: Location) -> None:
        """Open the file at the location and wait for the editor to exit."""
        argv = self.build_command(location)
        logger.debug(f"Running editor: {argv}")
        try:
            proc = subprocess.run(argv)
        except FileNotFoundError:
            raise RuntimeError(f"Editor not found: {argv[0]}")
        if proc.returncode != 0:
            logger.error(f"Editor exited with status {proc.returncode}")
            raise RuntimeError(f"Editor exited with status {proc.returncode}")
