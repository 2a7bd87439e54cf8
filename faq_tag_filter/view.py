"""Visibility bookkeeping for the rendered entry list."""

import logging
from typing import Any, Callable

from .config import config
from .models import Entry
from .scheduling import Debouncer
from .view_models import ViewState

logger = logging.getLogger(__name__)


class ViewCoordinator:
    """
    Owns the view state of one rendered FAQ block.

    Category filtering and search both end up here as a predicate over
    entries; the coordinator records which entries are shown and whether
    the "no results" indicator is up.
    """

    def __init__(self, entries: list[Entry]):
        self.entries = entries
        self.state = ViewState(visible={entry.id: True for entry in entries})

    def apply_visibility(self, predicate: Callable[[Entry], bool]) -> int:
        """Show the entries matching `predicate`, hide the rest."""
        for entry in self.entries:
            self.state.visible[entry.id] = bool(predicate(entry))

        visible_count = self.state.visible_count
        self._update_no_results(visible_count)
        return visible_count

    def show_all(self) -> int:
        return self.apply_visibility(lambda entry: True)

    def visible_ids(self) -> list[str]:
        return [entry.id for entry in self.entries if self.state.visible.get(entry.id)]

    def _update_no_results(self, visible_count: int) -> None:
        if visible_count == 0:
            self.state.no_results = True
            self.state.no_results_message = config.no_results_text
        else:
            self.state.no_results = False
            self.state.no_results_message = ""

    def toggle_entry(self, entry_id: str) -> bool:
        """
        Expand or collapse an entry; expanding one collapses the previous.

        Returns True if the entry is now expanded.
        """
        if entry_id not in self.state.visible:
            logger.debug(f"Ignoring toggle for unknown entry {entry_id}")
            return False

        if self.state.active_entry_id == entry_id:
            self.state.active_entry_id = None
            return False

        self.state.active_entry_id = entry_id
        return True

    def show_suggestions(self, suggestions: list[str]) -> None:
        self.state.suggestions = list(suggestions)
        self.state.suggestions_visible = bool(suggestions)

    def hide_suggestions(self) -> None:
        self.state.suggestions_visible = False


class SuggestionTrigger:
    """Computes suggestions once the typed query has settled."""

    def __init__(
        self,
        suggest: Callable[[str], list[str]],
        view: ViewCoordinator,
        on_clear: Callable[[], Any],
        debounce: float | None = None,
        min_length: int | None = None,
    ):
        self.suggest = suggest
        self.view = view
        self.on_clear = on_clear
        self.min_length = min_length if min_length is not None else config.suggestion_min_length
        delay = debounce if debounce is not None else config.suggestion_debounce
        self._debouncer = Debouncer(delay, self._settled)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, text: str) -> None:
        """Handle a keystroke in the search box."""
        query = text.strip()
        self.view.state.query = query

        if not query:
            self._debouncer.cancel()
            self.on_clear()
            self.view.hide_suggestions()
            return

        self._debouncer.trigger(query)

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _settled(self, query: str) -> None:
        if len(query) >= self.min_length:
            self.view.show_suggestions(self.suggest(query))
        else:
            self.view.hide_suggestions()
