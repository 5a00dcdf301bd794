"""Run external commands and capture their output.

Failures never raise out of this module's public methods: a command that
cannot be launched, exits non-zero or times out is reported as an absent
result. Each call is attempted exactly once.
"""

import subprocess
from typing import Optional

from .exceptions import CommandExecutionError
from .logging_config import logger

# Seconds to wait for a single command before giving up on it
DEFAULT_TIMEOUT = 10.0


class ProcessRunner:
    """
    Runs short-lived commands such as ``git rev-parse``.

    Example:
        runner = ProcessRunner(timeout=5)
        commit = runner.exec_and_get_stdout("git", "rev-parse", "HEAD")
        if runner.exec_and_check_success("git", "--version"):
            ...
    """

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT, cwd: Optional[str] = None) -> None:
        """
        Args:
            timeout: Per-command timeout in seconds, None to wait indefinitely
            cwd: Working directory for the commands (defaults to the current one)
        """
        self.timeout = timeout
        self.cwd = cwd

    def run(self, *args: str) -> subprocess.CompletedProcess:
        """
        Run a command and return the completed process.

        Raises:
            CommandExecutionError: If the command cannot be launched, exits
                non-zero or times out
        """
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                shell=False,
                timeout=self.timeout,
                cwd=self.cwd,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(f"{args[0]} timed out after {e.timeout} seconds")
        except OSError as e:
            raise CommandExecutionError(f"Could not run {args[0]}: {e}")

        if result.returncode != 0:
            raise CommandExecutionError(
                f"{' '.join(args)} exited with code {result.returncode}: {(result.stderr or '').strip()}"
            )
        return result

    def exec_and_get_stdout(self, *args: str) -> Optional[str]:
        """
        Run a command and return its standard output.

        Trailing whitespace is removed; leading whitespace is kept since it is
        significant in outputs such as ``git status --porcelain``.

        Returns:
            The output, or None if the command failed
        """
        try:
            result = self.run(*args)
        except CommandExecutionError as e:
            logger.debug(str(e))
            return None
        return (result.stdout or "").rstrip()

    def exec_and_check_success(self, *args: str) -> bool:
        """Run a command and report whether it exited with code 0."""
        try:
            self.run(*args)
        except CommandExecutionError as e:
            logger.debug(str(e))
            return False
        return True
