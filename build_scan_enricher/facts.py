"""Facts written to a build scan and the sink interface that receives them.

A fact is one unit of metadata: a ``Tag``, a ``Value`` or a ``Link``.
Sinks are append-only. Writing the same key twice records two facts.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_for_futures
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Union
from urllib.parse import quote_plus

from .logging_config import logger

SCAN_ID_PLACEHOLDER = "{SCAN_ID}"


@dataclass(frozen=True)
class Tag:
    """A bare label attached to the build scan."""

    label: str

    @property
    def kind(self) -> str:
        return "tag"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "label": self.label}


@dataclass(frozen=True)
class Value:
    """A named custom value."""

    key: str
    value: str

    @property
    def kind(self) -> str:
        return "value"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "key": self.key, "value": self.value}


@dataclass(frozen=True)
class Link:
    """A labelled URL."""

    label: str
    url: str

    @property
    def kind(self) -> str:
        return "link"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "label": self.label, "url": self.url}


Fact = Union[Tag, Value, Link]


class FactSink(Protocol):
    """
    Protocol for anything that accepts build scan facts.

    ``server`` is the base URL of the build scan server, or None when the
    sink does not know it. Search links are only derived when it is set.
    """

    @property
    def server(self) -> Optional[str]: ...

    def tag(self, label: str) -> None: ...

    def value(self, key: str, value: str) -> None: ...

    def link(self, label: str, url: str) -> None: ...


class BuildScanSink(FactSink, Protocol):
    """A ``FactSink`` that can also run work off the build's critical path."""

    def background(self, callback: Callable[[FactSink], None]) -> None: ...


def append_if_missing(text: str, suffix: str) -> str:
    """Append ``suffix`` to ``text`` unless it already ends with it."""
    return text if text.endswith(suffix) else text + suffix


def url_encode(text: str) -> str:
    """
    Form-encode ``text`` (spaces become ``+``).

    Only letters, digits and ``.-*_`` are left as-is, so ``~`` is encoded.
    """
    return quote_plus(text, safe="*", encoding="utf-8").replace("~", "%7E")


def build_search_url(server: str, label: str, value: str) -> str:
    """
    Build a link to the scans whose custom value ``label`` equals ``value``.

    The ``{SCAN_ID}`` placeholder is encoded as-is and resolved by the
    build scan server when the link is rendered.

    Args:
        server: Build scan server base URL
        label: Custom value name
        value: Custom value

    Returns:
        Search URL
    """
    search_params = f"search.names={url_encode(label)}&search.values={url_encode(value)}"
    return f"{append_if_missing(server, '/')}scans?{search_params}#selection.buildScanB={url_encode(SCAN_ID_PLACEHOLDER)}"


def add_custom_value_and_search_link(sink: FactSink, label: str, value: str) -> None:
    """Write ``Value(label, value)`` and, when the server is known, its search link."""
    sink.value(label, value)
    server = sink.server
    if server is not None:
        sink.link(f"{label} build scans", build_search_url(server, label, value))


class RecordingSink:
    """
    In-memory build scan sink.

    Facts are appended under a lock so background units may write while the
    immediate phase is still running. Background callbacks run on a thread
    pool; call ``wait()`` to block until all of them have finished.

    Example:
        sink = RecordingSink(server="https://scans.example.com")
        sink.tag("CI")
        sink.background(lambda api: api.tag("Dirty"))
        sink.wait()
        print(sink.facts)
    """

    def __init__(self, server: Optional[str] = None, max_workers: int = 2) -> None:
        self._server = server
        self._facts: List[Fact] = []
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="build-scan-background")
        self._pending: List[Future] = []

    @property
    def server(self) -> Optional[str]:
        return self._server

    @property
    def facts(self) -> List[Fact]:
        """Snapshot of the facts recorded so far, in write order."""
        with self._lock:
            return list(self._facts)

    def tags(self) -> List[str]:
        return [f.label for f in self.facts if isinstance(f, Tag)]

    def values(self) -> List[tuple]:
        return [(f.key, f.value) for f in self.facts if isinstance(f, Value)]

    def links(self) -> List[tuple]:
        return [(f.label, f.url) for f in self.facts if isinstance(f, Link)]

    def _record(self, fact: Fact) -> None:
        with self._lock:
            self._facts.append(fact)
        logger.debug(f"Recorded {fact.kind}: {fact}")

    def tag(self, label: str) -> None:
        self._record(Tag(label))

    def value(self, key: str, value: str) -> None:
        self._record(Value(key, value))

    def link(self, label: str, url: str) -> None:
        self._record(Link(label, url))

    def background(self, callback: Callable[[FactSink], None]) -> None:
        """Schedule ``callback`` on the background pool with this sink as its handle."""
        future = self._executor.submit(callback, self)
        future.add_done_callback(_log_background_failure)
        with self._lock:
            self._pending.append(future)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for scheduled background work.

        Args:
            timeout: Maximum number of seconds to wait, or None for no limit

        Returns:
            True if every background unit finished within the timeout
        """
        with self._lock:
            pending = list(self._pending)
        _, not_done = wait_for_futures(pending, timeout=timeout)
        return not not_done

    def close(self, wait: bool = True) -> None:
        """
        Release the pool.

        Args:
            wait: Block until running work finishes; when False, work that
                has not started yet is cancelled and never writes its facts
        """
        self._executor.shutdown(wait=wait, cancel_futures=not wait)


def _log_background_failure(future: Future) -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.warning(f"Background build scan work failed: {error}")
