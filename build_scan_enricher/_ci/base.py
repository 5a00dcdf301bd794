"""Table-driven base class for providers configured by environment variables."""

from typing import ClassVar, Dict, Optional, Tuple

from ..environment import Environment
from ..facts import FactSink, add_custom_value_and_search_link
from ..host import Project


class EnvironmentProvider:
    """
    Provider whose facts map one-to-one onto environment variables.

    Subclasses declare tables instead of code:

    - ``signature``: variables whose presence identifies the provider
      (any one of them is enough)
    - ``links``: variable -> link label, the variable holds the URL
    - ``values``: variable -> custom value key
    - ``search_values``: variable -> label, written as a value plus a
      search link
    - ``tags``: variables whose content is written as a bare tag

    Facts are written in that order: links, values, search values, tags.
    """

    name: ClassVar[str] = ""
    requires_project: ClassVar[bool] = False
    signature: ClassVar[Tuple[str, ...]] = ()
    links: ClassVar[Dict[str, str]] = {}
    values: ClassVar[Dict[str, str]] = {}
    search_values: ClassVar[Dict[str, str]] = {}
    tags: ClassVar[Tuple[str, ...]] = ()

    def detect(self, env: Environment) -> bool:
        return any(env.has_env(variable) for variable in self.signature)

    def capture(self, env: Environment, sink: FactSink, project: Optional[Project] = None) -> None:
        self.capture_links(env, sink)
        for variable, key in self.values.items():
            value = env.env(variable)
            if value is not None:
                sink.value(key, value)
        for variable, label in self.search_values.items():
            value = env.env(variable)
            if value is not None:
                add_custom_value_and_search_link(sink, label, value)
        for variable in self.tags:
            value = env.env(variable)
            if value is not None:
                sink.tag(value)

    def capture_links(self, env: Environment, sink: FactSink) -> None:
        for variable, label in self.links.items():
            url = env.env(variable)
            if url is not None:
                sink.link(label, url)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
