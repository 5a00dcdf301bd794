"""CI providers for build scan metadata."""

from .bamboo import BambooProvider
from .bitrise import BitriseProvider
from .circleci import CircleCIProvider
from .generic import GenericCIProvider
from .github import GitHubActionsProvider
from .gitlab import GitLabCIProvider
from .jenkins import JenkinsProvider, is_jenkins
from .teamcity import TeamCityProvider, read_properties_file
from .travis import TravisProvider

__all__ = [
    "BambooProvider",
    "BitriseProvider",
    "CircleCIProvider",
    "GenericCIProvider",
    "GitHubActionsProvider",
    "GitLabCIProvider",
    "JenkinsProvider",
    "TeamCityProvider",
    "TravisProvider",
    "is_jenkins",
    "read_properties_file",
]
