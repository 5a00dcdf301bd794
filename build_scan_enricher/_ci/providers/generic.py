"""Generic CI provider.

Many CI systems set ``CI=true``; the host may also pass ``CI`` as a system
property. This provider contributes no facts of its own, it only makes the
build count as a CI build.
"""

from ...environment import Environment
from ..base import EnvironmentProvider


class GenericCIProvider(EnvironmentProvider):
    """Provider for any CI that sets the ``CI`` variable or property."""

    name = "generic-ci"
    signature = ("CI",)

    def detect(self, env: Environment) -> bool:
        return env.has_env("CI") or env.has_system_property("CI")
