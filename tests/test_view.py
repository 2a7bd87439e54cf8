import asyncio

from faq_tag_filter.view import SuggestionTrigger, ViewCoordinator


def test_apply_visibility_counts_and_flags(basic_entries):
    view = ViewCoordinator(basic_entries)

    assert view.apply_visibility(lambda e: e.id == "faq-1") == 1
    assert view.visible_ids() == ["faq-1"]
    assert not view.state.no_results

    assert view.apply_visibility(lambda e: False) == 0
    assert view.state.no_results
    assert view.state.no_results_message == "No results found."

    assert view.show_all() == 2
    assert not view.state.no_results
    assert view.state.no_results_message == ""


def test_only_one_entry_expanded(basic_entries):
    view = ViewCoordinator(basic_entries)

    assert view.toggle_entry("faq-0")
    assert view.state.active_entry_id == "faq-0"

    assert view.toggle_entry("faq-1")
    assert view.state.active_entry_id == "faq-1"

    assert not view.toggle_entry("faq-1")
    assert view.state.active_entry_id is None

    assert not view.toggle_entry("missing")


def test_show_and_hide_suggestions(basic_entries):
    view = ViewCoordinator(basic_entries)

    view.show_suggestions(["one", "two"])
    assert view.state.suggestions_visible
    assert view.state.suggestions == ["one", "two"]

    view.show_suggestions([])
    assert not view.state.suggestions_visible

    view.show_suggestions(["one"])
    view.hide_suggestions()
    assert not view.state.suggestions_visible


def _make_trigger(view, calls, cleared):
    def suggest(query):
        calls.append(query)
        return [f"{query}-word"]

    return SuggestionTrigger(suggest, view, on_clear=lambda: cleared.append(True),
                             debounce=0.01, min_length=4)


def test_trigger_waits_for_query_to_settle(basic_entries):
    view = ViewCoordinator(basic_entries)
    calls, cleared = [], []

    async def scenario():
        trigger = _make_trigger(view, calls, cleared)
        for text in ["pr", "pri", "pric", "prici"]:
            trigger.on_input(text)
        assert trigger.pending
        await asyncio.sleep(0.05)
        assert not trigger.pending

    asyncio.run(scenario())

    assert calls == ["prici"]
    assert view.state.suggestions == ["prici-word"]
    assert view.state.suggestions_visible
    assert view.state.query == "prici"


def test_trigger_hides_for_short_queries_without_touching_results(basic_entries):
    view = ViewCoordinator(basic_entries)
    view.apply_visibility(lambda e: e.id == "faq-0")
    view.show_suggestions(["earlier"])
    calls, cleared = [], []

    async def scenario():
        trigger = _make_trigger(view, calls, cleared)
        trigger.on_input("pri")
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert calls == []
    assert not view.state.suggestions_visible
    assert view.visible_ids() == ["faq-0"]
    assert cleared == []


def test_trigger_empty_query_clears_immediately(basic_entries):
    view = ViewCoordinator(basic_entries)
    calls, cleared = [], []

    async def scenario():
        trigger = _make_trigger(view, calls, cleared)
        trigger.on_input("prici")
        trigger.on_input("   ")
        assert not trigger.pending
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert calls == []
    assert cleared == [True]
    assert view.state.query == ""
    assert not view.state.suggestions_visible
