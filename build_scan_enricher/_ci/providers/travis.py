"""Travis CI provider.

``TRAVIS_EVENT_TYPE`` (push, pull_request, cron, api) is written as a tag
of its own rather than as a searchable value.
"""

from ..base import EnvironmentProvider


class TravisProvider(EnvironmentProvider):
    """Provider for Travis CI jobs."""

    name = "travis"
    signature = ("TRAVIS_JOB_ID",)
    links = {"TRAVIS_BUILD_WEB_URL": "Travis build"}
    values = {"TRAVIS_BUILD_NUMBER": "CI build number"}
    search_values = {"TRAVIS_JOB_NAME": "CI job"}
    tags = ("TRAVIS_EVENT_TYPE",)
