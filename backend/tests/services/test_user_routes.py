"""User Routes — registration, caller identity and self-deletion.

Tests cover:
    - POST /users stores a normalized email and returns 201
    - duplicate email or user name is rejected with 409
    - missing, malformed or unknown X-User-Id is 401
    - DELETE /users/me removes the caller and their grants both ways
"""

from uuid import uuid4


async def test_register_normalizes_email(client):
    res = await client.post("/api/v1/users", json={
        "first_name": "Dana", "user_name": "dana", "email": "  Dana@Example.COM ",
    })
    assert res.status_code == 201
    assert res.json()["email"] == "dana@example.com"


async def test_register_rejects_invalid_email_shape(client):
    res = await client.post("/api/v1/users", json={
        "first_name": "Eve", "user_name": "eve", "email": "not-an-email",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_duplicate_email_rejected(client, alice):
    res = await client.post("/api/v1/users", json={
        "first_name": "Other", "user_name": "alice2", "email": "ALICE@example.com",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "INVALID_OPERATION"


async def test_duplicate_user_name_rejected(client, alice):
    res = await client.post("/api/v1/users", json={
        "first_name": "Other", "user_name": "alice", "email": "other@example.com",
    })
    assert res.status_code == 409


async def test_get_user(client, alice, bob):
    res = await client.get(f"/api/v1/users/{bob['id']}", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json()["user_name"] == "bob"


async def test_get_unknown_user_is_404(client, alice):
    res = await client.get(f"/api/v1/users/{uuid4()}", headers=alice["headers"])
    assert res.status_code == 404


async def test_missing_identity_header_is_401(client):
    res = await client.get("/api/v1/task-lists")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_malformed_identity_header_is_401(client):
    res = await client.get("/api/v1/task-lists", headers={"X-User-Id": "nope"})
    assert res.status_code == 401


async def test_unknown_user_header_is_401(client):
    res = await client.get("/api/v1/task-lists", headers={"X-User-Id": str(uuid4())})
    assert res.status_code == 401


async def test_delete_me_removes_user_and_grants(client, alice, bob, make_task):
    alice_task = await make_task(alice)
    bob_task = await make_task(bob, "Walk dog")
    await client.post(
        f"/api/v1/access/tasks/{alice_task['id']}/share",
        json={"email": bob["email"]}, headers=alice["headers"],
    )
    await client.post(
        f"/api/v1/access/tasks/{bob_task['id']}/share",
        json={"email": alice["email"]}, headers=bob["headers"],
    )

    res = await client.delete("/api/v1/users/me", headers=bob["headers"])
    assert res.status_code == 204

    # bob is gone; alice no longer sees bob's task and her own task has no grantees
    assert (await client.get("/api/v1/task-lists", headers=bob["headers"])).status_code == 401
    shared = await client.get("/api/v1/access/tasks", headers=alice["headers"])
    assert shared.json()["total"] == 0
    users = await client.get(
        f"/api/v1/access/tasks/{alice_task['id']}/users", headers=alice["headers"],
    )
    assert users.json()["total"] == 0
