"""Environment snapshot used by CI detection and IDE detection.

All lookups are exact-name and case-sensitive. Detection code never reads
``os.environ`` directly; it receives an ``Environment`` so tests can build
any combination of variables without touching the process environment.
"""

import os
import platform
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Environment:
    """
    Immutable snapshot of environment variables and system properties.

    System properties are the host build tool's key/value runtime settings
    (for example ``os.name``, ``idea.version`` or ``eclipse.buildId``). They
    are distinct from environment variables and are supplied by the host.
    """

    variables: Mapping[str, str] = field(default_factory=dict)
    system_properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))
        object.__setattr__(self, "system_properties", MappingProxyType(dict(self.system_properties)))

    def env(self, name: str) -> Optional[str]:
        """Return the environment variable ``name`` or None when unset."""
        return self.variables.get(name)

    def system_property(self, name: str) -> Optional[str]:
        """Return the system property ``name`` or None when unset."""
        return self.system_properties.get(name)

    def has_env(self, name: str) -> bool:
        return name in self.variables

    def has_system_property(self, name: str) -> bool:
        return name in self.system_properties

    def has_system_property_prefix(self, prefix: str) -> bool:
        """Check whether any system property key starts with ``prefix``."""
        return any(key.startswith(prefix) for key in self.system_properties)

    @classmethod
    def current(cls, system_properties: Optional[Mapping[str, str]] = None) -> "Environment":
        """
        Snapshot the running process.

        ``os.name`` defaults to ``platform.system()`` (``Linux``, ``Darwin``,
        ``Windows``), which differs from JVM names such as ``Mac OS X``. Hosts
        that know the JVM value pass it in ``system_properties``.

        Args:
            system_properties: Properties supplied by the host build tool.
                They override the defaults derived from the interpreter.

        Returns:
            Environment built from ``os.environ`` and the given properties
        """
        properties = {"os.name": platform.system()}
        if system_properties:
            properties.update(system_properties)
        return cls(variables=dict(os.environ), system_properties=properties)
