"""FAQ engine: ties the tag tree, filters, search and view together."""

import asyncio
import logging
from typing import Optional

from .config import config
from .filter_controller import CascadingFilterController
from .hierarchy import build_tag_hierarchy
from .models import Entry
from .scheduling import Debouncer, retry
from .search import SearchEngine
from .sources import SnapshotError, SnapshotSource
from .view import SuggestionTrigger, ViewCoordinator
from .view_models import FilterLevel

logger = logging.getLogger(__name__)


class FaqEngine:
    """
    One rendered FAQ block.

    Built once from an entry snapshot and never patched afterwards; a
    content change produces a new engine through `build_engine`.
    """

    def __init__(self, entries: list[Entry]):
        self.entries = entries
        self.hierarchy = build_tag_hierarchy(entries)
        self.view = ViewCoordinator(entries)
        self.controller = CascadingFilterController(self.hierarchy, self.view)
        self.search = SearchEngine(entries)
        self.suggestions = SuggestionTrigger(
            self.search.get_suggestions,
            self.view,
            on_clear=lambda: self.filter_faqs(""),
        )

    @property
    def has_filter(self) -> bool:
        """Whether the category filter is shown at all."""
        return bool(self.controller.levels)

    @property
    def filter_levels(self) -> list[FilterLevel]:
        return self.controller.levels

    # Category filter

    def select_category(self, level: int, path: str) -> bool:
        return self.controller.select(level, path)

    def clear_category(self, level: int) -> bool:
        return self.controller.clear(level)

    def toggle_dropdown(self, level: int) -> bool:
        return self.controller.toggle(level)

    def click_outside(self) -> None:
        """Close every open dropdown and the suggestion list."""
        self.controller.close_all()
        self.view.hide_suggestions()

    # Search

    def filter_faqs(self, query: str) -> int:
        """
        Filter the list by a search query.

        Searching always resets the category dropdowns to unselected;
        an empty query shows everything.
        """
        query = query.strip()
        self.view.state.query = query
        self.controller.reset_display()

        if not query:
            return self.view.show_all()

        visible = self.view.apply_visibility(lambda entry: self.search.matches(entry, query))
        logger.debug(f"Search {query!r}: {visible} entries visible")
        return visible

    def get_suggestions(self, query: str) -> list[str]:
        return self.search.get_suggestions(query)

    def on_search_input(self, text: str) -> None:
        """Feed a keystroke to the debounced suggestion trigger."""
        self.suggestions.on_input(text)

    def submit_search(self) -> int:
        """Run the search for the current query (Enter or the search icon)."""
        self.view.hide_suggestions()
        return self.filter_faqs(self.view.state.query)

    def choose_suggestion(self, suggestion: str) -> int:
        """Use a suggestion as the query and search for it."""
        self.suggestions.cancel()
        self.view.state.query = suggestion
        self.view.hide_suggestions()
        return self.filter_faqs(suggestion)

    # Entries

    def toggle_entry(self, entry_id: str) -> bool:
        return self.view.toggle_entry(entry_id)

    def visible_entries(self) -> list[Entry]:
        return [entry for entry in self.entries if self.view.state.visible.get(entry.id)]

    def entry_metadata(self) -> list[dict]:
        """Per-entry data the renderer stamps on each item."""
        return [
            {
                "id": entry.id,
                "category": entry.category,
                "tags": entry.individual_tags,
                "all_paths": entry.all_paths,
            }
            for entry in self.entries
        ]

    def close(self) -> None:
        self.suggestions.cancel()


def build_engine(entries: list[Entry]) -> Optional[FaqEngine]:
    """Build a fresh engine for a snapshot; no entries means nothing to render."""
    if not entries:
        logger.info("No FAQ data found, nothing to render")
        return None

    engine = FaqEngine(entries)
    logger.info(
        f"FAQ engine ready: {len(entries)} entries, "
        f"{len(engine.hierarchy)} categories"
    )
    return engine


class FaqBlockHost:
    """
    Keeps one engine in sync with its snapshot source.

    In authoring mode the source may still be filling up, so extraction
    waits briefly and then polls until the entry count settles. Change
    notifications trigger a debounced full rebuild.
    """

    def __init__(self, source: SnapshotSource, authoring: bool | None = None):
        self.source = source
        self.authoring = config.authoring_mode if authoring is None else authoring
        self.engine: Optional[FaqEngine] = None
        self._rebuild = Debouncer(config.rebuild_delay, self.reinitialize)
        self._unsubscribe = None

    async def initialize(self) -> bool:
        """
        Extract entries and build the first engine.

        Returns True if there was anything to render.
        """
        if self.authoring:
            await asyncio.sleep(config.authoring_wait)
            if self._unsubscribe is None:
                self._unsubscribe = self.source.subscribe(self.on_content_changed)

        entries = await self._extract()
        self.engine = build_engine(entries)
        return self.engine is not None

    async def _extract(self) -> list[Entry]:
        snapshot = await self.source.fetch()
        if not self.authoring:
            return snapshot

        attempts = 0

        async def poll() -> bool:
            nonlocal snapshot, attempts
            attempts += 1
            current = await self.source.fetch()
            changed = len(current) != len(snapshot)
            if changed:
                logger.debug(f"Entry count changed {len(snapshot)} -> {len(current)}")
                snapshot = current
            return attempts > 3 and not changed

        outcome = await retry(poll, config.retry_interval, config.retry_max_attempts)
        if not outcome.succeeded:
            logger.info(
                f"Entry count still changing after {outcome.attempts_used} polls, "
                f"using {len(snapshot)} entries"
            )
        return snapshot

    def on_content_changed(self) -> None:
        """Schedule a rebuild; bursts of changes collapse into one."""
        self._rebuild.trigger()

    @property
    def rebuild_pending(self) -> bool:
        return self._rebuild.pending

    async def reinitialize(self) -> bool:
        """Throw away the current engine and build a new one from the source."""
        try:
            entries = await self._extract()
        except SnapshotError as e:
            logger.error(f"Rebuild failed, keeping current view: {e}")
            return self.engine is not None

        if self.engine is not None:
            self.engine.close()
        self.engine = build_engine(entries)
        return self.engine is not None

    def close(self) -> None:
        self._rebuild.cancel()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self.engine is not None:
            self.engine.close()
