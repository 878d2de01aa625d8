"""Health probes and structured logging.

Tests cover:
    - liveness always 200
    - readiness 200 against the test engine
    - JSONFormatter emits extra fields as strings and omits absent ones
    - grant creation logs the task and grantee ids
"""

import json
import logging
from uuid import uuid4

from todolist.infrastructure.observability import JSONFormatter


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_uses_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


def test_json_formatter_includes_extra_fields():
    task_id = uuid4()
    record = logging.LogRecord(
        "todolist.test", logging.INFO, __file__, 1, "Task shared", None, None,
    )
    record.task_id = task_id
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "Task shared"
    assert payload["level"] == "INFO"
    assert payload["task_id"] == str(task_id)
    assert "user_id" not in payload


async def test_grant_is_logged(client, alice, bob, make_task, caplog):
    task = await make_task(alice)
    with caplog.at_level(logging.INFO, logger="todolist.services.sharing_policy"):
        await client.post(
            f"/api/v1/access/tasks/{task['id']}/share",
            json={"email": bob["email"]}, headers=alice["headers"],
        )
    record = next(r for r in caplog.records if r.getMessage() == "Task shared")
    assert str(record.task_id) == task["id"]
    assert str(record.user_id) == bob["id"]
