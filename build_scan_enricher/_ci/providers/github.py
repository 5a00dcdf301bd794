"""GitHub Actions provider.

Environment variables used:
- GITHUB_ACTIONS: Detection
- GITHUB_REPOSITORY: Repository in owner/repo format
- GITHUB_RUN_ID: Workflow run id
- GITHUB_WORKFLOW: Workflow name

The run link is only written when both the repository and the run id are
set.
"""

from ...environment import Environment
from ...facts import FactSink
from ...logging_config import logger
from ..base import EnvironmentProvider

GITHUB_URL = "https://github.com"


class GitHubActionsProvider(EnvironmentProvider):
    """Provider for GitHub Actions workflow runs."""

    name = "github-actions"
    signature = ("GITHUB_ACTIONS",)
    search_values = {"GITHUB_WORKFLOW": "GitHub workflow"}

    def capture_links(self, env: Environment, sink: FactSink) -> None:
        repository = env.env("GITHUB_REPOSITORY")
        run_id = env.env("GITHUB_RUN_ID")
        if repository is not None and run_id is not None:
            sink.link("GitHub Actions build", f"{GITHUB_URL}/{repository}/actions/runs/{run_id}")
        else:
            logger.debug("GitHub Actions detected but GITHUB_REPOSITORY or GITHUB_RUN_ID not set")
