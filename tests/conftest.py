import pytest

from faq_tag_filter.config import config
from faq_tag_filter.hierarchy import build_tag_hierarchy
from faq_tag_filter.models import Entry
from faq_tag_filter.view import ViewCoordinator
from faq_tag_filter.filter_controller import CascadingFilterController

NS = "smart-x-com"


@pytest.fixture(autouse=True)
def fast_config(monkeypatch):
    """Pin the namespace and shrink every delay so async tests stay quick."""
    monkeypatch.setattr(config, "tag_namespace", NS)
    monkeypatch.setattr(config, "snapshot_path", None)
    monkeypatch.setattr(config, "snapshot_url", None)
    monkeypatch.setattr(config, "search_match_markup", False)
    monkeypatch.setattr(config, "authoring_wait", 0)
    monkeypatch.setattr(config, "retry_interval", 0)
    monkeypatch.setattr(config, "rebuild_delay", 0.01)
    monkeypatch.setattr(config, "suggestion_debounce", 0.01)


@pytest.fixture
def basic_entries():
    """The two-entry example: one deep account tag, one flat billing tag."""
    return [
        Entry(
            id="faq-0",
            question="Reset password",
            answer="<p>Use the <b>account</b> settings page to change it.</p>",
            tags=[f"{NS}:account/security"],
        ),
        Entry(
            id="faq-1",
            question="Pricing plans",
            answer="<p>Compare our pricing options.</p>",
            tags=[f"{NS}:billing"],
        ),
    ]


@pytest.fixture
def product_entries():
    """Entries spread over a three-level product tree."""
    return [
        Entry(
            id="q1",
            question="How do I mount the enclosure on a wall?",
            answer="<p>Use the wall bracket kit.</p>",
            tags=[f"{NS}:products/enclosures/wall-mounted"],
        ),
        Entry(
            id="q2",
            question="Which enclosures are stainless steel?",
            answer="<ul><li>Compact series</li><li>Wall series</li></ul>",
            tags=[f"{NS}:products/enclosures/compact, {NS}:materials/steel"],
        ),
        Entry(
            id="q3",
            question="Can I cool an enclosure with a fan?",
            answer="Yes, with a filter fan.",
            tags=[f"{NS}:products/climate {NS}:products/enclosures"],
        ),
        Entry(
            id="q4",
            question="Where can I download the manuals?",
            answer="From the downloads section.",
            tags=[],
        ),
    ]


@pytest.fixture
def controller_for():
    """Build a controller and view for an entry list."""
    def make(entries):
        view = ViewCoordinator(entries)
        controller = CascadingFilterController(build_tag_hierarchy(entries), view)
        return controller, view
    return make
