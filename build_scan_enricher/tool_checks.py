"""Tool availability checks for external commands.

Git metadata is collected by running the ``git`` executable. When it is
missing the collection step is skipped entirely; this module provides the
probe and a helpful message for local runs.
"""

from dataclasses import dataclass, field
from typing import Optional

from .logging_config import logger
from .process import ProcessRunner


@dataclass
class ToolInfo:
    """Information about an external tool."""

    name: str
    command: str
    description: str
    install_instructions: str
    homepage: str
    required_for: list[str] = field(default_factory=list)


EXTERNAL_TOOLS: dict[str, ToolInfo] = {
    "git": ToolInfo(
        name="Git",
        command="git",
        description="Distributed version control system",
        install_instructions=(
            "Install via package manager:\n"
            "  - macOS: brew install git\n"
            "  - Debian/Ubuntu: apt-get install git\n"
            "  - Windows: https://git-scm.com/download/win"
        ),
        homepage="https://git-scm.com",
        required_for=["Git commit id", "Git branch", "Git status", "Source links"],
    ),
}


@dataclass
class ToolStatus:
    """Status of an external tool."""

    name: str
    available: bool
    info: Optional[ToolInfo] = None


def check_tool_available(command: str, runner: Optional[ProcessRunner] = None) -> bool:
    """
    Check if a command-line tool can be run.

    The tool counts as available when ``<command> --version`` exits with
    code 0; being on PATH is not enough.

    Args:
        command: The command to check (e.g., "git")
        runner: ProcessRunner to use, a default one if None

    Returns:
        True if the tool ran successfully
    """
    runner = runner or ProcessRunner()
    return runner.exec_and_check_success(command, "--version")


def is_git_installed(runner: Optional[ProcessRunner] = None) -> bool:
    return check_tool_available("git", runner)


def check_all_tools(runner: Optional[ProcessRunner] = None) -> dict[str, ToolStatus]:
    """
    Check availability of all external tools.

    Returns:
        Dictionary mapping tool ids to their status
    """
    return {
        tool_id: ToolStatus(name=info.name, available=check_tool_available(info.command, runner), info=info)
        for tool_id, info in EXTERNAL_TOOLS.items()
    }


def log_tool_status(runner: Optional[ProcessRunner] = None, verbose: bool = False) -> None:
    """
    Log the status of all external tools.

    Args:
        runner: ProcessRunner to probe with
        verbose: If True, show installation instructions for missing tools
    """
    statuses = check_all_tools(runner)
    available = [s for s in statuses.values() if s.available]
    missing = [s for s in statuses.values() if not s.available]

    if available:
        logger.info(f"Available tools: {', '.join(s.name for s in available)}")

    if missing:
        logger.warning(f"Missing tools: {', '.join(s.name for s in missing)}")
        if verbose:
            for status in missing:
                if status.info:
                    logger.info(f"{status.info.name} is needed for: {', '.join(status.info.required_for)}")
                    logger.info(f"  {status.info.install_instructions}")
