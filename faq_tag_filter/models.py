"""Data models for FAQ entries and the category tree."""

import re
from dataclasses import dataclass, field
from typing import Iterator

from .tag_parser import extract_all_paths, get_tag_name, parse_multiple_tags, split_path

_MARKUP = re.compile(r"<[^>]*>")


@dataclass
class Entry:
    """One question/answer record as supplied by the extraction snapshot."""

    id: str
    question: str
    answer: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def individual_tags(self) -> list[str]:
        """All tag identifiers across the raw tag fields, in field order."""
        tags = []
        for tag_field in self.tags:
            tags.extend(parse_multiple_tags(tag_field))
        return tags

    @property
    def all_paths(self) -> list[str]:
        """Every ancestor path of every tag, deduplicated."""
        paths: dict[str, None] = {}
        for tag in self.individual_tags:
            for path in extract_all_paths(tag):
                paths.setdefault(path, None)
        return list(paths)

    @property
    def category(self) -> str:
        """Display label taken from the first tag."""
        tags = self.individual_tags
        return get_tag_name(tags[0]) if tags else ""

    @property
    def plain_answer(self) -> str:
        """Answer text with markup removed."""
        return _MARKUP.sub(" ", self.answer)


@dataclass
class CategoryNode:
    """One unique tag path prefix with the entries filed under it."""

    name: str
    full_path: str
    level: int
    count: int = 0
    item_ids: set[str] = field(default_factory=set)
    children: dict[str, "CategoryNode"] = field(default_factory=dict)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def add_item(self, item_id: str) -> None:
        """Record an entry under this node; repeated ids are not counted twice."""
        self.item_ids.add(item_id)
        self.count = len(self.item_ids)

    def visible_children(self) -> list["CategoryNode"]:
        """Children that carry at least one entry, sorted by name."""
        return sorted(
            (child for child in self.children.values() if child.count > 0),
            key=lambda node: node.name,
        )


class TagHierarchy:
    """Tree of category nodes keyed by top-level segment."""

    def __init__(self, roots: dict[str, CategoryNode] | None = None):
        self.roots: dict[str, CategoryNode] = roots if roots is not None else {}

    @property
    def is_empty(self) -> bool:
        return not self.roots

    @property
    def depth(self) -> int:
        """Number of levels in the deepest branch."""
        return max((node.level + 1 for node in self.walk()), default=0)

    def top_level_options(self) -> list[CategoryNode]:
        """Top-level nodes with entries, sorted by name."""
        return sorted(
            (node for node in self.roots.values() if node.count > 0),
            key=lambda node: node.name,
        )

    def find(self, path: str | None) -> CategoryNode | None:
        """Look up the node for a full tag path."""
        segments = split_path(path)
        if not segments:
            return None

        current = self.roots
        node = None
        for segment in segments:
            node = current.get(segment)
            if node is None:
                return None
            current = node.children
        return node

    def walk(self) -> Iterator[CategoryNode]:
        """Depth-first iteration over every node, siblings by name."""
        stack = sorted(self.roots.values(), key=lambda n: n.name, reverse=True)
        while stack:
            node = stack.pop()
            yield node
            stack.extend(sorted(node.children.values(), key=lambda n: n.name, reverse=True))

    def __len__(self) -> int:
        return sum(1 for _ in self.walk())
