"""Provider registry for CI detection and metadata extraction."""

from typing import Any, Dict, List, Optional

from ..environment import Environment
from ..facts import FactSink
from ..host import Project
from ..logging_config import logger
from .protocol import CIProvider


class ProviderRegistry:
    """
    Registry of CI provider plugins.

    Every registered provider is evaluated on its own; detection never stops
    at the first match. A build wrapped by a generic ``CI=true`` flag under
    Jenkins is detected by both the generic and the Jenkins provider, and
    both capture.

    Example:
        registry = ProviderRegistry()
        registry.register(GenericCIProvider())
        registry.register(JenkinsProvider())

        registry.is_ci(env)
        registry.capture_immediate(env, sink)
        registry.capture_deferred(env, project, sink)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._providers: List[CIProvider] = []

    def register(self, provider: CIProvider) -> None:
        """
        Register a CI provider.

        Providers capture in registration order.

        Args:
            provider: CIProvider implementation to register
        """
        self._providers.append(provider)
        logger.debug(f"Registered CI provider: {provider.name} (requires_project={provider.requires_project})")

    def detected(self, env: Environment) -> List[CIProvider]:
        """
        Get every provider whose signature matches the environment.

        Args:
            env: Environment snapshot

        Returns:
            Matching providers in registration order
        """
        return [p for p in self._providers if p.detect(env)]

    def is_ci(self, env: Environment) -> bool:
        """Check if any provider, the generic one included, detects a CI build."""
        return any(p.detect(env) for p in self._providers)

    def capture_immediate(self, env: Environment, sink: FactSink) -> List[str]:
        """
        Capture facts of detected providers that only need the environment.

        Args:
            env: Environment snapshot
            sink: Destination for facts

        Returns:
            Names of the providers that captured
        """
        return self._capture([p for p in self.detected(env) if not p.requires_project], env, sink, None)

    def capture_deferred(self, env: Environment, project: Project, sink: FactSink) -> List[str]:
        """
        Capture facts of detected providers that read project properties.

        Args:
            env: Environment snapshot
            project: Evaluated root project
            sink: Destination for facts

        Returns:
            Names of the providers that captured
        """
        return self._capture([p for p in self.detected(env) if p.requires_project], env, sink, project)

    def _capture(
        self,
        providers: List[CIProvider],
        env: Environment,
        sink: FactSink,
        project: Optional[Project],
    ) -> List[str]:
        captured = []
        for provider in providers:
            try:
                provider.capture(env, sink, project)
                captured.append(provider.name)
                logger.debug(f"Captured CI metadata from {provider.name}")
            except Exception as e:
                logger.warning(f"Error capturing CI metadata from {provider.name}: {e}")
                continue
        return captured

    def list_providers(self) -> List[Dict[str, Any]]:
        """
        List all registered providers.

        Returns:
            List of dicts with 'name' and 'requires_project' keys
        """
        return [{"name": p.name, "requires_project": p.requires_project} for p in self._providers]

    def clear(self) -> None:
        """Remove all registered providers."""
        self._providers.clear()
