"""Atlassian Bamboo provider.

Bamboo exports plan variables in lower camel case with a ``bamboo_`` prefix.
"""

from ..base import EnvironmentProvider


class BambooProvider(EnvironmentProvider):
    """Provider for Bamboo builds."""

    name = "bamboo"
    signature = ("bamboo_resultsUrl",)
    links = {"bamboo_resultsUrl": "Bamboo build"}
    values = {"bamboo_buildNumber": "CI build number"}
    search_values = {
        "bamboo_planName": "CI plan",
        "bamboo_buildPlanName": "CI build plan",
        "bamboo_agentId": "CI agent",
    }
