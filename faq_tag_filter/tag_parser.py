"""Parsing of hierarchical `namespace:segment/segment` tag strings."""

import re

from .config import config

_TAG_SEPARATORS = re.compile(r"[,\s]+")


def _marker(namespace: str | None) -> str:
    return f"{namespace or config.tag_namespace}:"


def parse_multiple_tags(field: str | None, namespace: str | None = None) -> list[str]:
    """
    Split a raw tag field into individual tag identifiers.

    Handles comma and whitespace separated tags. Tokens without the
    namespace marker are dropped; order and duplicates are kept.
    """
    if not field:
        return []

    marker = _marker(namespace)
    tags = []
    for token in _TAG_SEPARATORS.split(field):
        token = token.strip()
        if token and marker in token:
            tags.append(token)
    return tags


def split_path(tag: str | None) -> list[str]:
    """Return the non-blank path segments after the first colon."""
    if not tag or ":" not in tag:
        return []

    _, _, tag_path = tag.partition(":")
    return [segment for segment in tag_path.split("/") if segment.strip()]


def extract_all_paths(tag: str | None, namespace: str | None = None) -> list[str]:
    """
    Expand one tag into its ancestor chain, shallowest first.

    `ns:a/b/c` becomes `["ns:a", "ns:a/b", "ns:a/b/c"]`. Tags without
    the namespace marker or without path content give an empty list.
    """
    marker = _marker(namespace)
    if not tag or marker not in tag:
        return []

    segments = split_path(tag)
    return [
        marker + "/".join(segments[:i])
        for i in range(1, len(segments) + 1)
    ]


def get_tag_name(tag: str | None) -> str:
    """Human-readable name of a tag: its deepest segment."""
    if not tag:
        return ""
    return tag.split("/")[-1].split(":")[-1].strip()
