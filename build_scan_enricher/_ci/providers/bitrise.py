"""Bitrise provider."""

from ..base import EnvironmentProvider


class BitriseProvider(EnvironmentProvider):
    """Provider for Bitrise builds."""

    name = "bitrise"
    signature = ("BITRISE_BUILD_URL",)
    links = {"BITRISE_BUILD_URL": "Bitrise build"}
    values = {"BITRISE_BUILD_NUMBER": "CI build number"}
