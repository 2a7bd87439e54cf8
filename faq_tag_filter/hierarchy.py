"""Builds the counted category tree from the tags of all entries."""

import logging

from .config import config
from .models import CategoryNode, Entry, TagHierarchy
from .tag_parser import extract_all_paths, parse_multiple_tags, split_path

logger = logging.getLogger(__name__)


def collect_all_tags(entries: list[Entry]) -> list[str]:
    """Deduplicated individual tags across all entries, first-seen order."""
    tags: dict[str, None] = {}
    for entry in entries:
        for tag in entry.individual_tags:
            tags.setdefault(tag, None)
    return list(tags)


def _entry_paths(entry: Entry) -> list[str]:
    """Ancestor chains of every tag on an entry, duplicates kept."""
    paths = []
    for tag_field in entry.tags:
        for tag in parse_multiple_tags(tag_field):
            paths.extend(extract_all_paths(tag))
    return paths


def _collect_paths(entries: list[Entry]) -> set[str]:
    all_paths: set[str] = set()
    for entry in entries:
        all_paths.update(_entry_paths(entry))
    return all_paths


def _add_structure(roots: dict[str, CategoryNode], path: str) -> None:
    segments = split_path(path)
    current = roots

    for index, segment in enumerate(segments):
        if segment not in current:
            current[segment] = CategoryNode(
                name=segment,
                full_path=config.tag_marker + "/".join(segments[: index + 1]),
                level=index,
            )
        current = current[segment].children


def _attribute(roots: dict[str, CategoryNode], path: str, item_id: str) -> None:
    current = roots

    for segment in split_path(path):
        node = current.get(segment)
        if node is None:
            logger.debug(f"Path {path} missing from tree at '{segment}', skipping")
            return
        node.add_item(item_id)
        current = node.children


def build_tag_hierarchy(entries: list[Entry]) -> TagHierarchy:
    """
    Build the category tree for an entry set.

    Runs in three passes:
    1. Collects every ancestor path of every tag
    2. Creates one node per path, leaving existing nodes untouched
    3. Files each entry id under every node along its tags' paths

    Nodes exist before any counting happens, so a deep tag is counted
    at every ancestor even when no entry is tagged with that ancestor.
    """
    all_paths = _collect_paths(entries)

    roots: dict[str, CategoryNode] = {}
    for path in all_paths:
        _add_structure(roots, path)

    for index, entry in enumerate(entries):
        item_id = entry.id or f"faq-{index}"
        for path in _entry_paths(entry):
            _attribute(roots, path, item_id)

    hierarchy = TagHierarchy(roots)
    logger.debug(
        f"Built tag hierarchy: {len(all_paths)} paths, "
        f"{len(roots)} top-level categories, depth {hierarchy.depth}"
    )
    return hierarchy
