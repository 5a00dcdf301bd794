"""Rich console utilities for build-scan-enricher.

Used by the inspection CLI to show which facts a build would record.
"""

import os
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from .facts import Fact, Link, Tag, Value

IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "tag": "magenta",
        "value": "cyan",
        "link": "blue",
    }
)

# Shared console instance
# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def _fact_row(fact: Fact) -> tuple:
    if isinstance(fact, Tag):
        return ("[tag]tag[/tag]", escape(fact.label), "")
    if isinstance(fact, Value):
        return ("[value]value[/value]", escape(fact.key), escape(fact.value))
    if isinstance(fact, Link):
        return ("[link]link[/link]", escape(fact.label), escape(fact.url))
    raise TypeError(f"Unknown fact: {fact!r}")


def print_facts_table(facts: Iterable[Fact], title: str = "Build Scan Facts") -> None:
    """
    Print facts as a table, in the order they were written.

    Args:
        facts: Facts to show
        title: Table title
    """
    facts = list(facts)
    if not facts:
        console.print("[warning]No facts recorded[/warning]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Name", style="bold")
    table.add_column("Value / URL", overflow="fold")

    for fact in facts:
        table.add_row(*_fact_row(fact))

    console.print(table)
