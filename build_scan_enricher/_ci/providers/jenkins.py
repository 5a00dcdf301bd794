"""Jenkins and Hudson provider.

Hudson is Jenkins' predecessor and exports the same job variables, so both
share one extractor. Only the build link label differs.

Environment variables used:
- JENKINS_URL / HUDSON_URL: Detection
- BUILD_URL: Link to the build
- BUILD_NUMBER: Build number
- NODE_NAME, JOB_NAME, STAGE_NAME: Agent, job and pipeline stage
"""

from ...environment import Environment
from ...facts import FactSink
from ..base import EnvironmentProvider


def is_jenkins(env: Environment) -> bool:
    return env.has_env("JENKINS_URL")


class JenkinsProvider(EnvironmentProvider):
    """Provider for Jenkins and Hudson builds."""

    name = "jenkins"
    signature = ("JENKINS_URL", "HUDSON_URL")
    values = {"BUILD_NUMBER": "CI build number"}
    search_values = {
        "NODE_NAME": "CI node",
        "JOB_NAME": "CI job",
        "STAGE_NAME": "CI stage",
    }

    def capture_links(self, env: Environment, sink: FactSink) -> None:
        url = env.env("BUILD_URL")
        if url is not None:
            sink.link("Jenkins build" if is_jenkins(env) else "Hudson build", url)
