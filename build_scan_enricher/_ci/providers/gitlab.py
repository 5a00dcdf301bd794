"""GitLab CI provider."""

from ..base import EnvironmentProvider


class GitLabCIProvider(EnvironmentProvider):
    """Provider for GitLab CI jobs. Writes both the job and the pipeline link."""

    name = "gitlab-ci"
    signature = ("GITLAB_CI",)
    links = {
        "CI_JOB_URL": "GitLab build",
        "CI_PIPELINE_URL": "GitLab pipeline",
    }
    search_values = {
        "CI_JOB_NAME": "CI job",
        "CI_JOB_STAGE": "CI stage",
    }
