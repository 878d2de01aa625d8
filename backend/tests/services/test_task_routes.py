"""Task Routes — CRUD, filters, sorting, search and status lifecycle.

Tests cover:
    - created tasks start not_started and inherit the list owner
    - due dates in the past are rejected
    - status walk not_started -> in_progress -> done; done is terminal; repeat is a no-op
    - unknown status values are 400 DOMAIN_ERROR
    - filters by status and due window, sort keys and direction
    - search is case-insensitive and owner-scoped
    - non-owners get 404 for every owned-task endpoint
"""

from uuid import uuid4

FUTURE = "2099-01-01T00:00:00Z"
LATER = "2099-06-01T00:00:00Z"


async def _set_status(client, user, task_id, value):
    return await client.put(
        f"/api/v1/tasks/{task_id}/status", json={"status": value},
        headers=user["headers"],
    )


async def test_create_task_defaults(client, alice, make_task):
    task = await make_task(alice, "  Buy milk ", description="2 liters", due_date=FUTURE)
    assert task["title"] == "Buy milk"
    assert task["status"] == "not_started"
    assert task["owner_id"] == alice["id"]
    assert task["tag_id"] is None


async def test_create_in_other_users_list_is_404(client, alice, bob, make_task):
    task = await make_task(alice)
    res = await client.post(
        f"/api/v1/task-lists/{task['task_list_id']}/tasks",
        json={"title": "Sneaky"}, headers=bob["headers"],
    )
    assert res.status_code == 404


async def test_past_due_date_rejected(client, alice):
    lst = await client.post(
        "/api/v1/task-lists", json={"title": "Work"}, headers=alice["headers"],
    )
    res = await client.post(
        f"/api/v1/task-lists/{lst.json()['id']}/tasks",
        json={"title": "Late", "due_date": "2000-01-01T00:00:00Z"},
        headers=alice["headers"],
    )
    assert res.status_code == 400
    assert "past" in res.json()["error"]["message"]


async def test_update_details(client, alice, make_task):
    task = await make_task(alice)
    res = await client.put(
        f"/api/v1/tasks/{task['id']}",
        json={"title": "Buy oat milk", "description": "", "due_date": LATER},
        headers=alice["headers"],
    )
    body = res.json()
    assert res.status_code == 200
    assert body["title"] == "Buy oat milk"
    assert body["description"] is None
    assert body["due_date"].startswith("2099-06-01")


# ─── status lifecycle ────────────────────────────────────────────

async def test_status_walk_and_terminal_done(client, alice, make_task):
    task = await make_task(alice)

    assert (await _set_status(client, alice, task["id"], "in_progress")).json()["status"] == "in_progress"
    assert (await _set_status(client, alice, task["id"], "done")).json()["status"] == "done"

    again = await _set_status(client, alice, task["id"], "done")
    assert again.status_code == 200
    assert again.json()["status"] == "done"

    back = await _set_status(client, alice, task["id"], "in_progress")
    assert back.status_code == 400
    assert back.json()["error"]["code"] == "DOMAIN_ERROR"

    current = await client.get(f"/api/v1/tasks/{task['id']}", headers=alice["headers"])
    assert current.json()["status"] == "done"


async def test_not_started_straight_to_done(client, alice, make_task):
    task = await make_task(alice)
    res = await _set_status(client, alice, task["id"], "done")
    assert res.json()["status"] == "done"


async def test_unknown_status_rejected(client, alice, make_task):
    task = await make_task(alice)
    res = await _set_status(client, alice, task["id"], "archived")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DOMAIN_ERROR"


async def test_grantee_cannot_change_status(client, alice, bob, make_task):
    task = await make_task(alice)
    await client.post(
        f"/api/v1/access/tasks/{task['id']}/share",
        json={"email": bob["email"]}, headers=alice["headers"],
    )
    res = await _set_status(client, bob, task["id"], "done")
    assert res.status_code == 404


# ─── listing ─────────────────────────────────────────────────────

async def _seed_list(client, alice, make_task):
    first = await make_task(alice, "b-task", due_date=LATER)
    list_id = first["task_list_id"]
    second = await make_task(alice, "a-task", task_list_id=list_id, due_date=FUTURE)
    third = await make_task(alice, "c-task", task_list_id=list_id)
    await _set_status(client, alice, second["id"], "in_progress")
    return list_id, first, second, third


async def test_filter_by_status(client, alice, make_task):
    list_id, _, second, _ = await _seed_list(client, alice, make_task)
    res = await client.get(
        f"/api/v1/task-lists/{list_id}/tasks", params={"status": "in_progress"},
        headers=alice["headers"],
    )
    assert [t["id"] for t in res.json()] == [second["id"]]


async def test_filter_by_multiple_statuses(client, alice, make_task):
    list_id, *_ = await _seed_list(client, alice, make_task)
    res = await client.get(
        f"/api/v1/task-lists/{list_id}/tasks",
        params=[("status", "in_progress"), ("status", "not_started")],
        headers=alice["headers"],
    )
    assert len(res.json()) == 3


async def test_filter_by_due_window(client, alice, make_task):
    list_id, first, second, _ = await _seed_list(client, alice, make_task)
    res = await client.get(
        f"/api/v1/task-lists/{list_id}/tasks",
        params={"due_before": "2099-03-01T00:00:00Z"},
        headers=alice["headers"],
    )
    assert [t["id"] for t in res.json()] == [second["id"]]

    res = await client.get(
        f"/api/v1/task-lists/{list_id}/tasks",
        params={"due_after": "2099-03-01T00:00:00Z"},
        headers=alice["headers"],
    )
    assert [t["id"] for t in res.json()] == [first["id"]]


async def test_sort_by_title_both_directions(client, alice, make_task):
    list_id, *_ = await _seed_list(client, alice, make_task)
    url = f"/api/v1/task-lists/{list_id}/tasks"

    asc = await client.get(url, params={"sort_by": "title"}, headers=alice["headers"])
    assert [t["title"] for t in asc.json()] == ["a-task", "b-task", "c-task"]

    desc = await client.get(
        url, params={"sort_by": "title", "ascending": "false"}, headers=alice["headers"],
    )
    assert [t["title"] for t in desc.json()] == ["c-task", "b-task", "a-task"]


async def test_default_order_is_creation_order(client, alice, make_task):
    list_id, *_ = await _seed_list(client, alice, make_task)
    res = await client.get(f"/api/v1/task-lists/{list_id}/tasks", headers=alice["headers"])
    assert [t["title"] for t in res.json()] == ["b-task", "a-task", "c-task"]


async def test_unknown_sort_key_rejected(client, alice, make_task):
    list_id, *_ = await _seed_list(client, alice, make_task)
    res = await client.get(
        f"/api/v1/task-lists/{list_id}/tasks", params={"sort_by": "priority"},
        headers=alice["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── search ──────────────────────────────────────────────────────

async def test_search_is_case_insensitive_and_owner_scoped(client, alice, bob, make_task):
    mine = await make_task(alice, "Call Plumber")
    await make_task(bob, "call plumber too")

    res = await client.get(
        "/api/v1/tasks/search", params={"title": "plumb"}, headers=alice["headers"],
    )
    assert [t["id"] for t in res.json()] == [mine["id"]]


async def test_search_treats_wildcards_literally(client, alice, make_task):
    await make_task(alice, "Pay 100% rent")
    await make_task(alice, "Pay rent")
    res = await client.get(
        "/api/v1/tasks/search", params={"title": "100%"}, headers=alice["headers"],
    )
    assert [t["title"] for t in res.json()] == ["Pay 100% rent"]


# ─── ownership ───────────────────────────────────────────────────

async def test_non_owner_gets_404(client, alice, bob, make_task):
    task = await make_task(alice)
    url = f"/api/v1/tasks/{task['id']}"
    assert (await client.get(url, headers=bob["headers"])).status_code == 404
    assert (await client.put(url, json={"title": "x"}, headers=bob["headers"])).status_code == 404
    assert (await client.delete(url, headers=bob["headers"])).status_code == 404


async def test_unknown_task_is_404(client, alice):
    res = await client.get(f"/api/v1/tasks/{uuid4()}", headers=alice["headers"])
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
