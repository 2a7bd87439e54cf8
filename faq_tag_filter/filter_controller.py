"""Cascading category dropdowns, one per hierarchy depth."""

import logging
from typing import Optional

from .config import config
from .matcher import item_matches_filter
from .models import CategoryNode, TagHierarchy
from .view import ViewCoordinator
from .view_models import FilterLevel, FilterOption

logger = logging.getLogger(__name__)


class CascadingFilterController:
    """
    State machine over the filter dropdowns.

    Level 0 lists the top-level categories. Selecting a category filters
    the entry list and, when the category has subcategories, opens the
    next level with them. Clearing a level drops everything below it and
    falls back to the parent selection.
    """

    def __init__(self, hierarchy: TagHierarchy, view: ViewCoordinator):
        self.hierarchy = hierarchy
        self.view = view
        self.levels: list[FilterLevel] = []

        if hierarchy.is_empty:
            logger.debug("No tags found, filter is not rendered")
            return

        self.levels.append(self._make_level(0, "", hierarchy.top_level_options()))

    def _make_level(self, level: int, parent_path: str, nodes: list[CategoryNode]) -> FilterLevel:
        return FilterLevel(
            level=level,
            parent_path=parent_path,
            options=[FilterOption.from_node(node) for node in nodes],
            label=config.placeholder_for(level),
        )

    def get_level(self, level: int) -> Optional[FilterLevel]:
        if 0 <= level < len(self.levels):
            return self.levels[level]
        return None

    @property
    def active_path(self) -> Optional[str]:
        """Deepest selected category path."""
        for filter_level in reversed(self.levels):
            if filter_level.selected_path:
                return filter_level.selected_path
        return None

    def select(self, level: int, path: str) -> bool:
        """
        Select a category at a level.

        Returns False (and changes nothing) if the level or path is not
        currently offered.
        """
        filter_level = self.get_level(level)
        if filter_level is None or filter_level.option_for(path) is None:
            logger.debug(f"Ignoring selection of {path!r} at level {level}")
            return False

        filter_level.selected_path = path
        self._drop_levels_below(level)
        self._filter_by(path)

        node = self.hierarchy.find(path)
        if node is not None:
            children = node.visible_children()
            if children:
                self.levels.append(self._make_level(level + 1, path, children))
        else:
            logger.warning(f"Selected path {path} is not in the hierarchy")

        self._refresh_display()
        return True

    def clear(self, level: int) -> bool:
        """Clear the selection at a level and re-filter by its parent."""
        filter_level = self.get_level(level)
        if filter_level is None:
            return False

        filter_level.selected_path = None
        self._drop_levels_below(level)

        parent = self.get_level(level - 1) if level > 0 else None
        if parent is not None and parent.selected_path:
            self._filter_by(parent.selected_path)
        else:
            self.view.show_all()

        self._refresh_display()
        return True

    def toggle(self, level: int) -> bool:
        """Open a level's option list, closing any other; returns the new open state."""
        filter_level = self.get_level(level)
        if filter_level is None:
            return False

        is_open = not filter_level.is_open
        self.close_all()
        filter_level.is_open = is_open
        return is_open

    def close_all(self) -> None:
        for filter_level in self.levels:
            filter_level.is_open = False

    def reset_display(self) -> None:
        """Show every dropdown unselected without discarding any level."""
        for filter_level in self.levels:
            filter_level.selected_path = None
        self._refresh_display()

    def _drop_levels_below(self, level: int) -> None:
        del self.levels[level + 1:]

    def _filter_by(self, path: str) -> None:
        visible = self.view.apply_visibility(lambda entry: item_matches_filter(entry, path))
        logger.debug(f"Filter {path}: {visible} entries visible")

    def _refresh_display(self) -> None:
        for filter_level in self.levels:
            option = filter_level.selected_option
            filter_level.label = option.name if option else config.placeholder_for(filter_level.level)
            filter_level.is_open = False
