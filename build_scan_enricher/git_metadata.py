"""Git metadata collection.

Runs the ``git`` executable in the build's working directory to find the
current commit, branch, working tree status and origin remote, and derives a
source browse link for repositories hosted on GitHub or GitLab.

Every command is optional on its own. A failing command only drops the
facts that depend on it, and a missing ``git`` drops all of them.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from .facts import FactSink, add_custom_value_and_search_link
from .logging_config import logger
from .process import ProcessRunner
from .tool_checks import is_git_installed

# Length of the abbreviated commit id
SHORT_COMMIT_LENGTH = 8


@dataclass(frozen=True)
class GitState:
    """Result of a single git collection pass. Any field may be absent."""

    commit_id: Optional[str] = None
    branch: Optional[str] = None
    status: Optional[str] = None
    origin_url: Optional[str] = None

    def has_data(self) -> bool:
        return bool(self.commit_id or self.branch or self.status or self.origin_url)


@dataclass(frozen=True)
class HostPattern:
    """
    Recognizes one hosting service in a remote URL.

    Both ``https://host/owner/repo.git`` and the SCP-like
    ``git@host:owner/repo.git`` forms match.
    """

    name: str
    host: str
    link_label: str
    url_template: str

    @property
    def pattern(self) -> Pattern[str]:
        return re.compile(rf"(.*){re.escape(self.host)}[/:](.*)")

    def applies_to(self, origin_url: str) -> bool:
        return f"{self.host}/" in origin_url or f"{self.host}:" in origin_url

    def repo_path(self, origin_url: str) -> Optional[str]:
        """Extract ``owner/repo`` from the URL, without a trailing ``.git``."""
        match = self.pattern.fullmatch(origin_url)
        if not match:
            return None
        path = match.group(2)
        return path[: -len(".git")] if path.endswith(".git") else path

    def browse_url(self, origin_url: str, commit_id: str) -> Optional[str]:
        repo_path = self.repo_path(origin_url)
        if repo_path is None:
            return None
        return self.url_template.format(repo_path=repo_path, commit_id=commit_id)


GITHUB = HostPattern(
    name="github",
    host="github.com",
    link_label="Github source",
    url_template="https://github.com/{repo_path}/tree/{commit_id}",
)

GITLAB = HostPattern(
    name="gitlab",
    host="gitlab.com",
    link_label="GitLab Source",
    url_template="https://gitlab.com/{repo_path}/-/commit/{commit_id}",
)

HOST_PATTERNS: Tuple[HostPattern, ...] = (GITHUB, GITLAB)


def browse_link(
    origin_url: str,
    commit_id: str,
    patterns: Tuple[HostPattern, ...] = HOST_PATTERNS,
) -> Optional[Tuple[str, str]]:
    """
    Derive the source browse link for a commit.

    Patterns are tried in order and the first one whose host occurs in the
    URL decides; an unrecognized host yields no link.

    Args:
        origin_url: Remote URL, e.g. ``git@github.com:org/repo.git``
        commit_id: Commit to link to
        patterns: Host patterns to try

    Returns:
        (label, url) tuple, or None
    """
    for host_pattern in patterns:
        if host_pattern.applies_to(origin_url):
            url = host_pattern.browse_url(origin_url, commit_id)
            if url is None:
                return None
            return host_pattern.link_label, url
    return None


def collect_git_state(runner: ProcessRunner) -> GitState:
    """
    Collect git metadata for the working directory of ``runner``.

    Args:
        runner: ProcessRunner used for every git command

    Returns:
        GitState; empty when git is not installed
    """
    if not is_git_installed(runner):
        logger.debug("git is not available, skipping git metadata")
        return GitState()

    commit_id = runner.exec_and_get_stdout("git", "rev-parse", f"--short={SHORT_COMMIT_LENGTH}", "--verify", "HEAD")
    branch = runner.exec_and_get_stdout("git", "rev-parse", "--abbrev-ref", "HEAD")
    status = runner.exec_and_get_stdout("git", "status", "--porcelain")

    origin_url = None
    if commit_id:
        origin_url = runner.exec_and_get_stdout("git", "config", "--get", "remote.origin.url")

    return GitState(commit_id=commit_id, branch=branch, status=status, origin_url=origin_url)


def capture_git_metadata(sink: FactSink, runner: Optional[ProcessRunner] = None) -> GitState:
    """
    Collect git metadata and write it to the sink.

    Facts written:
    - "Git commit id" value and search link, plus the source browse link
    - the branch name as a tag and as the "Git branch" value
    - "Dirty" tag and the raw "Git status" value for a modified working tree

    Args:
        sink: Destination for facts
        runner: ProcessRunner to use, a default one if None

    Returns:
        The collected GitState
    """
    state = collect_git_state(runner or ProcessRunner())

    if state.commit_id:
        add_custom_value_and_search_link(sink, "Git commit id", state.commit_id)

        if state.origin_url:
            link = browse_link(state.origin_url, state.commit_id)
            if link is not None:
                sink.link(*link)
            else:
                logger.debug(f"No source link for origin {state.origin_url}")

    if state.branch:
        sink.tag(state.branch)
        sink.value("Git branch", state.branch)

    if state.status:
        sink.tag("Dirty")
        sink.value("Git status", state.status)

    return state
