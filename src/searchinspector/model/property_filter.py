"""
Property Tree Filter
====================
Prunes a component's property tree down to the nodes matching a search query,
keeping the chain of ancestors above every match.

Rules:
    - A node is a direct match if its display name, with whitespace removed,
      contains any query token (case-insensitive).
    - A direct match is emitted with `show_subtree_unfiltered=True`; its whole
      subtree is rendered beneath it without further filtering.
    - A non-matching composite node is emitted with
      `show_subtree_unfiltered=False` (header only) iff something below it was
      emitted, immediately before its first emitted descendant.
    - Non-matching leaves are dropped.
    - Nodes with a custom drawer render their own children, so the walk does
      not descend into them; they can only appear as direct matches. This
      overrides the ancestor rule above: a non-matching custom-drawer node is
      left out even when a name below it would match, because the drawer,
      not this filter, decides what is shown beneath it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from searchinspector.model.host import PropertyNode

logger = logging.getLogger(__name__)


def tokenize(search_text: str) -> tuple[str, ...]:
    """Split search text on whitespace into case-folded tokens."""
    return tuple(t.casefold() for t in search_text.split())


def normalize_name(display_name: str) -> str:
    return "".join(display_name.split()).casefold()


def is_direct_match(display_name: str, tokens: Sequence[str]) -> bool:
    name = normalize_name(display_name)
    return any(token in name for token in tokens)


@dataclass(frozen=True)
class FilterEntry:
    node: PropertyNode
    show_subtree_unfiltered: bool


@dataclass(frozen=True)
class FilterResult:
    """Ordered, ancestor-preserving view of a property tree for one query."""
    query: str
    entries: tuple[FilterEntry, ...] = ()

    def __iter__(self) -> Iterator[FilterEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def nodes(self) -> list[PropertyNode]:
        return [e.node for e in self.entries]

    def matches(self) -> list[PropertyNode]:
        return [e.node for e in self.entries if e.show_subtree_unfiltered]


def _collect(node: PropertyNode, tokens: Sequence[str], out: list[Optional[FilterEntry]]) -> None:
    for child in node.visible_children():
        if is_direct_match(child.display_name, tokens):
            out.append(FilterEntry(child, True))
            continue

        if not child.is_composite or child.has_custom_drawer:
            continue

        # Reserve the ancestor's slot; fill it only if a descendant lands after it
        slot = len(out)
        out.append(None)
        _collect(child, tokens, out)
        if len(out) > slot + 1:
            out[slot] = FilterEntry(child, False)
        else:
            out.pop()


def filter_property_tree(root: PropertyNode, search_text: str) -> FilterResult:
    """
    Filter the visible descendants of `root` against `search_text`.

    The root itself stands for the component and is never emitted.
    """
    tokens = tokenize(search_text)
    if not tokens:
        return FilterResult(query=search_text)

    out: list[Optional[FilterEntry]] = []
    _collect(root, tokens, out)
    entries = tuple(e for e in out if e is not None)
    logger.debug(f"Filter '{search_text}' on '{root.display_name}': {len(entries)} entries.")
    return FilterResult(query=search_text, entries=entries)
