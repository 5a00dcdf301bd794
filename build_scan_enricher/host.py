"""Interfaces to the host build tool.

The enhancer never drives the build itself. The host hands it a root
project once the project graph is evaluated, and the test tasks it wants
parallelism recorded for.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol


class Project(Protocol):
    """Read-only view of the root project's properties."""

    def find_property(self, name: str) -> Optional[str]:
        """Return the project property ``name`` or None when it is not set."""
        ...


class TestTask(Protocol):
    """A test task whose fork count is recorded before it runs."""

    @property
    def identity_path(self) -> str:
        """Build-unique path of the task, e.g. ``:app:test``."""
        ...

    @property
    def max_parallel_forks(self) -> int: ...

    def do_first(self, action: Callable[["TestTask"], None]) -> None:
        """Register ``action`` to run, with this task, right before execution."""
        ...


@dataclass
class StaticProject:
    """Project backed by a plain dictionary of properties."""

    properties: Dict[str, Any] = field(default_factory=dict)

    def find_property(self, name: str) -> Optional[str]:
        value = self.properties.get(name)
        return None if value is None else str(value)


@dataclass
class StaticTestTask:
    """
    Minimal test task. ``execute()`` runs the registered pre-execution
    actions in registration order.
    """

    identity_path: str
    max_parallel_forks: int = 1
    actions: List[Callable[["StaticTestTask"], None]] = field(default_factory=list)

    def do_first(self, action: Callable[["StaticTestTask"], None]) -> None:
        self.actions.append(action)

    def execute(self) -> None:
        for action in self.actions:
            action(self)
