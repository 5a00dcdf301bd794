"""Test doubles shared by the test modules."""

from typing import Dict, List, Optional, Tuple

GIT_VERSION = ("git", "--version")
GIT_COMMIT = ("git", "rev-parse", "--short=8", "--verify", "HEAD")
GIT_BRANCH = ("git", "rev-parse", "--abbrev-ref", "HEAD")
GIT_STATUS = ("git", "status", "--porcelain")
GIT_ORIGIN = ("git", "config", "--get", "remote.origin.url")


class FakeRunner:
    """ProcessRunner stand-in answering from a table of command outputs.

    Commands missing from the table behave like failed commands.
    """

    def __init__(self, outputs: Optional[Dict[Tuple[str, ...], str]] = None, installed: bool = True) -> None:
        self.outputs = outputs or {}
        self.installed = installed
        self.calls: List[Tuple[str, ...]] = []

    def exec_and_check_success(self, *args: str) -> bool:
        self.calls.append(args)
        if args == GIT_VERSION:
            return self.installed
        return args in self.outputs

    def exec_and_get_stdout(self, *args: str) -> Optional[str]:
        self.calls.append(args)
        return self.outputs.get(args)
