import pytest
from fastapi.testclient import TestClient

from faq_tag_filter import api

NS = "smart-x-com"


@pytest.fixture
def client(product_entries):
    api.load_entries(product_entries)
    yield TestClient(api.app)
    api.set_engine(None)


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "ready"
    assert body["entries"] == 4
    assert body["namespace"] == NS


def test_no_data_is_unavailable():
    api.set_engine(None)
    client = TestClient(api.app)

    assert client.get("/tree").status_code == 503
    assert client.get("/").json()["status"] == "no data"


def test_entries(client):
    entries = client.get("/entries").json()

    assert [e["id"] for e in entries] == ["q1", "q2", "q3", "q4"]
    assert entries[1]["category"] == "compact"
    assert entries[1]["tags"] == [f"{NS}:products/enclosures/compact", f"{NS}:materials/steel"]
    assert all(e["visible"] for e in entries)


def test_tree(client):
    tree = client.get("/tree").json()

    assert [node["name"] for node in tree] == ["materials", "products"]
    products = tree[1]
    assert products["count"] == 3
    assert products["has_children"]
    assert [child["name"] for child in products["children"]] == ["climate", "enclosures"]


def test_cascading_filter(client):
    view = client.post("/filters/select", json={"level": 0, "path": f"{NS}:products"}).json()
    assert view["visible_ids"] == ["q1", "q2", "q3"]
    assert len(view["levels"]) == 2

    view = client.post("/filters/select", json={"level": 1, "path": f"{NS}:products/climate"}).json()
    assert view["visible_ids"] == ["q3"]
    assert view["levels"][1]["display"] == "selected"

    view = client.post("/filters/clear", json={"level": 1}).json()
    assert view["visible_ids"] == ["q1", "q2", "q3"]

    view = client.post("/filters/clear", json={"level": 0}).json()
    assert view["visible_ids"] == ["q1", "q2", "q3", "q4"]
    assert len(view["levels"]) == 1


def test_select_rejects_unknown_path(client):
    response = client.post("/filters/select", json={"level": 0, "path": f"{NS}:nope"})
    assert response.status_code == 400


def test_toggle_dropdown(client):
    view = client.post("/filters/0/toggle").json()
    assert view["levels"][0]["is_open"]
    assert client.post("/filters/3/toggle").status_code == 404


def test_search(client):
    client.post("/filters/select", json={"level": 0, "path": f"{NS}:materials"})

    view = client.get("/search", params={"q": "fan"}).json()
    assert view["visible_ids"] == ["q3"]
    assert view["levels"][0]["selected_path"] is None

    view = client.get("/search", params={"q": "zzz"}).json()
    assert view["no_results"]
    assert view["message"] == "No results found."


def test_suggestions(client):
    assert client.get("/suggestions", params={"q": "enc"}).json()["suggestions"] == []

    body = client.get("/suggestions", params={"q": "encl"}).json()
    assert body["suggestions"][0] == "enclosure"
    assert len(body["suggestions"]) <= 5


def test_toggle_entry(client):
    assert client.post("/entries/q2/toggle").json() == {"id": "q2", "expanded": True}
    assert client.post("/entries/q2/toggle").json() == {"id": "q2", "expanded": False}
    assert client.post("/entries/nope/toggle").status_code == 404
