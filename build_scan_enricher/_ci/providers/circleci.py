"""CircleCI provider.

CircleCI has no dedicated detection flag besides ``CIRCLECI``; the build URL
is always exported, so its presence is used as the signature.
"""

from ..base import EnvironmentProvider


class CircleCIProvider(EnvironmentProvider):
    """Provider for CircleCI builds."""

    name = "circleci"
    signature = ("CIRCLE_BUILD_URL",)
    links = {"CIRCLE_BUILD_URL": "CircleCI build"}
    values = {"CIRCLE_BUILD_NUM": "CI build number"}
    search_values = {
        "CIRCLE_JOB": "CI job",
        "CIRCLE_WORKFLOW_ID": "CI workflow",
    }
