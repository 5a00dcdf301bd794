"""CIProvider protocol for CI detection and metadata extraction plugins."""

from typing import Optional, Protocol

from ..environment import Environment
from ..facts import FactSink
from ..host import Project


class CIProvider(Protocol):
    """
    Protocol defining the interface for CI provider plugins.

    Each provider pairs a detection predicate with the rules that turn its
    environment into build scan facts. Predicates are independent: several
    providers may detect the same build, and every one of them captures.

    Example:
        class BitriseProvider(EnvironmentProvider):
            name = "bitrise"
            signature = ("BITRISE_BUILD_URL",)
            links = {"BITRISE_BUILD_URL": "Bitrise build"}
            values = {"BITRISE_BUILD_NUMBER": "CI build number"}
    """

    @property
    def name(self) -> str:
        """
        Short identifier of the provider.

        Used for logging and for listing registered providers.
        Examples: "jenkins", "github-actions", "generic-ci"
        """
        ...

    @property
    def requires_project(self) -> bool:
        """
        Whether capture needs the evaluated root project.

        Providers that only read environment variables capture in the
        immediate phase. Providers that read project properties capture
        once the host reports the project graph as ready.
        """
        ...

    def detect(self, env: Environment) -> bool:
        """
        Check if the build runs under this provider.

        Args:
            env: Environment snapshot

        Returns:
            True if the provider's signature variables are present
        """
        ...

    def capture(self, env: Environment, sink: FactSink, project: Optional[Project] = None) -> None:
        """
        Write this provider's facts to the sink.

        Implementations should write one fact per recognized input that is
        present and skip absent inputs silently.

        Args:
            env: Environment snapshot
            sink: Destination for facts
            project: Evaluated root project, only passed to providers that
                require it
        """
        ...
