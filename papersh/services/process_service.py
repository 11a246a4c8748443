"""Spawning external viewer, editor, and browser processes."""

import logging
import subprocess
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)

PLACEHOLDER = "{}"


def build_command(template: Sequence[str], files: Sequence[Path]) -> list[str]:
    """Expand a command template with a list of files.

    The files replace a ``{}`` argument wherever it appears; without a
    placeholder they are appended.

    >>> build_command(["zathura", "--fork"], [Path("a.pdf")])
    ['zathura', '--fork', 'a.pdf']
    >>> build_command(["open", "-a", "{}", "--new"], [Path("a.pdf")])
    ['open', '-a', 'a.pdf', '--new']
    """
    paths = [str(f) for f in files]
    argv = [template[0]]
    substituted = False
    for arg in template[1:]:
        if arg == PLACEHOLDER:
            argv.extend(paths)
            substituted = True
        else:
            argv.append(arg)
    if not substituted:
        argv.extend(paths)
    return argv


class ProcessService:
    """Service for launching external programs on paper and note files."""

    def spawn(self, argv: list[str], role: str, block: bool = False, detach: bool = True) -> bool:
        """Start *argv*.

        Args:
            argv: Program and arguments
            role: What the program is for ("viewer", "editor", "browser"),
                used in failure reports
            block: Wait for the process to exit
            detach: Silence stdio and start a new session, so the program
                outlives the shell

        Returns:
            True if the process started; spawn failures are logged, not raised
        """
        kwargs = {}
        if detach:
            kwargs = {
                "stdin": subprocess.DEVNULL,
                "stdout": subprocess.DEVNULL,
                "stderr": subprocess.DEVNULL,
                "start_new_session": True,
            }

        logger.debug("Spawning %s: %s", role, argv)
        try:
            process = subprocess.Popen(argv, **kwargs)
        except FileNotFoundError as e:
            logger.warning("Invalid %s command '%s': %s", role, argv[0], e)
            return False
        except OSError as e:
            logger.warning("Failed to spawn subprocess '%s': %s", argv[0], e)
            return False

        if block:
            try:
                process.wait()
            except KeyboardInterrupt:
                logger.warning("Stopped waiting for %s '%s'", role, argv[0])
        return True

    def open_files(
        self,
        template: Sequence[str],
        files: Sequence[Path],
        role: str,
        batch: bool,
        block: bool = False,
        detach: bool = True,
    ) -> list[bool]:
        """Open *files* with *template*, all at once or one process per file.

        Returns:
            One success flag per file
        """
        if not files:
            return []
        if batch:
            ok = self.spawn(build_command(template, files), role, block=block, detach=detach)
            return [ok] * len(files)
        return [
            self.spawn(build_command(template, [f]), role, block=block, detach=detach)
            for f in files
        ]
