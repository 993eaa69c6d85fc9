def _make_list(client, headers, name="Groceries"):
    r = client.post("/lists", json={"name": name, "color": "#ffaa00"}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_create_update_and_list(client, headers):
    created = _make_list(client, headers)
    assert created["name"] == "Groceries"
    assert created["color"] == "#ffaa00"
    assert created["icon"] is None

    r = client.patch(f"/lists/{created['id']}", json={"icon": "cart"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["icon"] == "cart"
    assert r.json()["name"] == "Groceries"

    other = _make_list(client, headers, "Work")
    names = [l["name"] for l in client.get("/lists", headers=headers).json()]
    assert names == ["Groceries", "Work"]
    assert other["id"] != created["id"]


def test_filter_and_move_tasks_between_lists(client, headers):
    groceries = _make_list(client, headers)["id"]
    in_list = client.post("/tasks", json={"title": "Eggs", "list_id": groceries}, headers=headers).json()
    inbox = client.post("/tasks/quick", json={"text": "Call mom @ 7pm"}, headers=headers).json()
    assert inbox["due_at"] == "2025-01-01T19:00:00"

    r = client.get("/tasks", params={"list_id": groceries}, headers=headers)
    assert [t["id"] for t in r.json()] == [in_list["id"]]
    r = client.get("/tasks", params={"inbox": True}, headers=headers)
    assert [t["id"] for t in r.json()] == [inbox["id"]]

    r = client.put(f"/tasks/{inbox['id']}/list", json={"list_id": groceries}, headers=headers)
    assert r.status_code == 200
    assert r.json()["list_id"] == groceries

    r = client.put(f"/tasks/{in_list['id']}/list", json={"list_id": None}, headers=headers)
    assert r.json()["list_id"] is None


def test_foreign_list_is_rejected(client, headers):
    groceries = _make_list(client, headers)["id"]
    stranger = {"X-User-Id": headers["X-User-Id"] + "-other"}
    r = client.post("/tasks", json={"title": "Eggs", "list_id": groceries}, headers=stranger)
    assert r.status_code == 404
    assert client.patch(f"/lists/{groceries}", json={"name": "Mine"}, headers=stranger).status_code == 404


def test_deleting_list_moves_tasks_to_inbox(client, headers):
    groceries = _make_list(client, headers)["id"]
    task = client.post("/tasks", json={"title": "Eggs", "list_id": groceries}, headers=headers).json()

    r = client.delete(f"/lists/{groceries}", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"deleted": True}
    assert client.get("/lists", headers=headers).json() == []
    assert client.get(f"/tasks/{task['id']}", headers=headers).json()["list_id"] is None
    assert client.delete(f"/lists/{groceries}", headers=headers).status_code == 404


def test_patch_rejects_null_name(client, headers):
    created = _make_list(client, headers)
    r = client.patch(f"/lists/{created['id']}", json={"name": None}, headers=headers)
    assert r.status_code == 422
    r = client.patch(f"/lists/{created['id']}", json={"color": None}, headers=headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Groceries"
    assert r.json()["color"] is None
