"""CI provider plugin architecture for build scan metadata.

Each provider detects one CI system from the environment and extracts its
build link, build number and job/stage/agent names. Providers are not
mutually exclusive: every provider that detects the build captures.

Providers (in registration order):
- generic-ci: ``CI`` variable or system property, no facts of its own
- jenkins: Jenkins and Hudson
- teamcity: reads project properties, captures after project evaluation
- circleci, bamboo, github-actions, gitlab-ci, travis, bitrise

Usage:
    from build_scan_enricher._ci import create_default_registry

    registry = create_default_registry()
    if registry.is_ci(env):
        registry.capture_immediate(env, sink)
"""

from .base import EnvironmentProvider
from .protocol import CIProvider
from .registry import ProviderRegistry

__all__ = [
    "CIProvider",
    "EnvironmentProvider",
    "ProviderRegistry",
    "create_default_registry",
]


def create_default_registry() -> ProviderRegistry:
    """
    Create a registry with all supported CI providers.

    Returns:
        ProviderRegistry configured with standard providers
    """
    from .providers import (
        BambooProvider,
        BitriseProvider,
        CircleCIProvider,
        GenericCIProvider,
        GitHubActionsProvider,
        GitLabCIProvider,
        JenkinsProvider,
        TeamCityProvider,
        TravisProvider,
    )

    registry = ProviderRegistry()

    registry.register(GenericCIProvider())
    registry.register(JenkinsProvider())
    registry.register(TeamCityProvider())
    registry.register(CircleCIProvider())
    registry.register(BambooProvider())
    registry.register(GitHubActionsProvider())
    registry.register(GitLabCIProvider())
    registry.register(TravisProvider())
    registry.register(BitriseProvider())

    return registry
