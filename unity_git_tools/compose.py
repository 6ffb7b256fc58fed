"""Build .gitignore content from the Unity template and custom snippets."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from typing import Any

from .errors import UnknownSnippetError


@dataclasses.dataclass(frozen=True)
class CustomIgnoreSnippet:
    """A named block of ignore patterns appended after the template."""

    name: str
    title: str
    body: str
    enabled: bool = False


BUILTIN_SNIPPETS: tuple[CustomIgnoreSnippet, ...] = (
    CustomIgnoreSnippet(
        name="gitkeep",
        title="include .gitkeep",
        body="# include .gitkeep\n!.gitkeep",
    ),
    CustomIgnoreSnippet(
        name="rider",
        title="JetBrains Rider ignore",
        body="# JetBrains Rider\n.idea",
    ),
)


def compose(
    template: str,
    snippets: Iterable[CustomIgnoreSnippet],
    newline: str = "\n",
) -> str:
    """Append each enabled snippet to *template* in declaration order.

    Every enabled snippet contributes ``newline + body + newline``;
    disabled ones contribute nothing.
    """
    parts = [template]
    for snippet in snippets:
        if not snippet.enabled:
            continue
        parts.append(newline)
        parts.append(snippet.body)
        parts.append(newline)
    return "".join(parts)


def select_snippets(
    snippets: Sequence[CustomIgnoreSnippet],
    names: Iterable[str],
) -> tuple[CustomIgnoreSnippet, ...]:
    """Enable exactly the snippets in *names*, keeping declaration order.

    An empty *names* keeps each snippet's declared default.
    """
    wanted = list(dict.fromkeys(names))
    if not wanted:
        return tuple(snippets)

    known = [s.name for s in snippets]
    unknown = [n for n in wanted if n not in known]
    if unknown:
        raise UnknownSnippetError(unknown, known)

    return tuple(dataclasses.replace(s, enabled=s.name in wanted) for s in snippets)


def load_custom_snippets(entries: Any) -> tuple[CustomIgnoreSnippet, ...]:
    """Build snippet records from the ``custom_snippets`` config list."""
    if entries is None:
        return ()
    if not isinstance(entries, list):
        raise ValueError("custom_snippets must be a list of mappings.")

    result: list[CustomIgnoreSnippet] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"custom_snippets[{index}] must be a mapping.")
        name = entry.get("name")
        body = entry.get("body")
        if not name or body is None:
            raise ValueError(f"custom_snippets[{index}] needs both 'name' and 'body'.")
        result.append(CustomIgnoreSnippet(
            name=str(name),
            title=str(entry.get("title", name)),
            body=str(body).rstrip("\r\n"),
            enabled=bool(entry.get("enabled", False)),
        ))
    return tuple(result)


def available_snippets(custom: Iterable[CustomIgnoreSnippet] = ()) -> tuple[CustomIgnoreSnippet, ...]:
    """Built-in snippets followed by *custom* ones; names must be unique."""
    combined = BUILTIN_SNIPPETS + tuple(custom)
    seen: set[str] = set()
    for snippet in combined:
        if snippet.name in seen:
            raise ValueError(f"Duplicate snippet name: {snippet.name}")
        seen.add(snippet.name)
    return combined
