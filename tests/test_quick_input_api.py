def test_parse_preview_omits_unset_fields(client):
    r = client.post("/quick-input/parse", json={"text": "Buy milk"})
    assert r.status_code == 200
    assert r.json() == {"title": "Buy milk"}


def test_parse_preview_uses_reference_clock(client):
    r = client.post("/quick-input/parse", json={"text": "Call mom @ 7pm"})
    assert r.json() == {"title": "Call mom", "due_at": "2025-01-01T19:00:00"}


def test_parse_preview_full_line(client):
    r = client.post("/quick-input/parse", json={"text": "Lunch @ tomorrow 1pm @ Cafe #food"})
    assert r.json() == {
        "title": "Lunch",
        "due_at": "2025-01-02T13:00:00",
        "location": "Cafe",
        "description": "Cafe",
        "tags": ["food"],
    }


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
