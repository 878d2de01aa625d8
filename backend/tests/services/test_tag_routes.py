"""Tag Routes — create-and-attach, attach/detach, delete.

Tests cover:
    - creating a tag attaches it to the task
    - repeated tag names are disambiguated per owner
    - attaching another user's tag is 409 INVALID_OPERATION
    - detaching is idempotent
    - deleting a tag clears it from every task
"""

from uuid import uuid4


async def _create_tag(client, user, task_id, name):
    res = await client.post(
        f"/api/v1/tasks/{task_id}/tags", json={"name": name}, headers=user["headers"],
    )
    assert res.status_code == 201, res.text
    return res.json()


async def _get_task(client, user, task_id):
    res = await client.get(f"/api/v1/tasks/{task_id}", headers=user["headers"])
    return res.json()


async def test_create_tag_attaches_to_task(client, alice, make_task):
    task = await make_task(alice)
    tag = await _create_tag(client, alice, task["id"], "urgent")
    assert (await _get_task(client, alice, task["id"]))["tag_id"] == tag["id"]


async def test_repeated_tag_names_disambiguated(client, alice, make_task):
    task = await make_task(alice)
    first = await _create_tag(client, alice, task["id"], "urgent")
    second = await _create_tag(client, alice, task["id"], "urgent")
    assert first["name"] == "urgent"
    assert second["name"] == "urgent (1)"

    res = await client.get("/api/v1/tags", headers=alice["headers"])
    assert res.json()["total"] == 2


async def test_create_tag_on_foreign_task_is_404(client, alice, bob, make_task):
    task = await make_task(alice)
    res = await client.post(
        f"/api/v1/tasks/{task['id']}/tags", json={"name": "mine"},
        headers=bob["headers"],
    )
    assert res.status_code == 404


async def test_attach_and_detach(client, alice, make_task):
    task = await make_task(alice)
    other = await make_task(alice, "Other")
    tag = await _create_tag(client, alice, other["id"], "home")

    res = await client.put(
        f"/api/v1/tasks/{task['id']}/tags/{tag['id']}", headers=alice["headers"],
    )
    assert res.json()["tag_id"] == tag["id"]

    for _ in range(2):
        res = await client.delete(f"/api/v1/tasks/{task['id']}/tag", headers=alice["headers"])
        assert res.status_code == 200
        assert res.json()["tag_id"] is None


async def test_attach_foreign_tag_rejected(client, alice, bob, make_task):
    bob_task = await make_task(bob)
    bob_tag = await _create_tag(client, bob, bob_task["id"], "bob-only")
    task = await make_task(alice)

    res = await client.put(
        f"/api/v1/tasks/{task['id']}/tags/{bob_tag['id']}", headers=alice["headers"],
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "INVALID_OPERATION"


async def test_attach_unknown_tag_rejected(client, alice, make_task):
    task = await make_task(alice)
    res = await client.put(
        f"/api/v1/tasks/{task['id']}/tags/{uuid4()}", headers=alice["headers"],
    )
    assert res.status_code == 409


async def test_delete_tag_clears_tasks(client, alice, make_task):
    task = await make_task(alice)
    tag = await _create_tag(client, alice, task["id"], "someday")

    res = await client.delete(f"/api/v1/tags/{tag['id']}", headers=alice["headers"])
    assert res.status_code == 204
    assert (await _get_task(client, alice, task["id"]))["tag_id"] is None


async def test_delete_foreign_tag_is_404(client, alice, bob, make_task):
    task = await make_task(alice)
    tag = await _create_tag(client, alice, task["id"], "private")
    res = await client.delete(f"/api/v1/tags/{tag['id']}", headers=bob["headers"])
    assert res.status_code == 404
