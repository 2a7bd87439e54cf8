"""Prefix matching of entry tags against a selected category path."""

from .models import Entry


def _bare_path(tag: str) -> str:
    parts = tag.split(":")
    return ":".join(parts[1:]) if len(parts) > 1 else tag


def tag_matches_filter(item_tag: str | None, filter_path: str | None) -> bool:
    """
    Check whether a tag falls under a filter path.

    Matching respects segment boundaries: `ns:a/b` is under `ns:a`,
    `ns:ab` is not.
    """
    if not item_tag or not filter_path:
        return False

    clean_tag = item_tag.strip()
    clean_filter = filter_path.strip()
    if clean_tag == clean_filter:
        return True

    item_path = _bare_path(clean_tag)
    filter_part = _bare_path(clean_filter)
    if item_path.startswith(filter_part):
        remainder = item_path[len(filter_part):]
        return remainder == "" or remainder.startswith("/")

    return False


def item_matches_filter(entry: Entry, filter_path: str | None) -> bool:
    """
    True if any of the entry's tag paths falls under the filter path.

    Uses the normalized ancestor chain, the same paths the hierarchy counts.
    """
    if not filter_path:
        return False
    return any(tag_matches_filter(path, filter_path) for path in entry.all_paths)
