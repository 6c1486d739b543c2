"""HTTP surface tests."""
import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.main import create_app

PNG = b"\x89PNG\r\n\x1a\n" + b"\x02" * 16


@pytest.fixture
def app(services, columns):
    return create_app(services=services)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _create(client, name, column_id, **extra):
    resp = await client.post("/api/tasks", json={"name": name, "columnId": column_id, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.anyio
class TestBoard:
    async def test_board_shape(self, client, columns) -> None:
        todo, _, _ = columns
        await _create(client, "banana", todo.id)

        resp = await client.get("/api/board")

        assert resp.status_code == 200
        board = resp.json()
        assert [c["name"] for c in board["columns"]] == ["To Do", "In Progress", "Done"]
        task = board["columns"][0]["tasks"][0]
        assert task["name"] == "banana"
        assert task["columnName"] == "To Do"
        assert task["sortOrder"] == 1
        assert task["isFavorite"] is False
        assert task["attachments"] == []

    async def test_health(self, client) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


@pytest.mark.anyio
class TestTasks:
    async def test_create_and_get(self, client, columns) -> None:
        todo, _, _ = columns
        created = await _create(client, "Plan sprint", todo.id, description="Q3", deadline="2026-11-01T12:00:00Z")

        resp = await client.get(f"/api/tasks/{created['id']}")

        assert resp.status_code == 200
        assert resp.json()["description"] == "Q3"
        assert resp.json()["deadline"] == "2026-11-01T12:00:00Z"
        assert resp.json()["createdAt"].endswith("Z")

    async def test_create_validation_errors(self, client, columns) -> None:
        todo, _, _ = columns

        resp = await client.post("/api/tasks", json={"name": "   ", "columnId": todo.id})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Task name is required"

        resp = await client.post("/api/tasks", json={"name": "lost", "columnId": 999})
        assert resp.status_code == 404

        resp = await client.get("/api/tasks")
        assert resp.json() == []

    async def test_update_moves_to_end_of_new_column(self, client, columns) -> None:
        todo, doing, _ = columns
        task = await _create(client, "edit", todo.id)
        await _create(client, "resident", doing.id)

        resp = await client.put(
            f"/api/tasks/{task['id']}",
            json={"name": "edited", "description": "", "isFavorite": True, "columnId": doing.id},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "edited"
        assert body["isFavorite"] is True
        assert body["columnId"] == doing.id
        assert body["sortOrder"] == 2

    async def test_move_endpoint(self, client, columns) -> None:
        todo, doing, _ = columns
        task = await _create(client, "drag me", todo.id)
        resident = await _create(client, "resident", doing.id)

        resp = await client.patch(f"/api/tasks/{task['id']}/move", json={"columnId": doing.id, "sortOrder": 1})

        assert resp.status_code == 200
        assert resp.json()["columnName"] == "In Progress"
        assert resp.json()["sortOrder"] == 1
        resident_now = (await client.get(f"/api/tasks/{resident['id']}")).json()
        assert resident_now["sortOrder"] == 2

    async def test_move_errors(self, client, columns) -> None:
        todo, _, _ = columns
        task = await _create(client, "stuck", todo.id)

        resp = await client.patch("/api/tasks/999/move", json={"columnId": todo.id, "sortOrder": 1})
        assert resp.status_code == 404

        resp = await client.patch(f"/api/tasks/{task['id']}/move", json={"columnId": 999, "sortOrder": 1})
        assert resp.status_code == 404

    async def test_column_listing_and_delete(self, client, columns) -> None:
        todo, _, _ = columns
        b = await _create(client, "b", todo.id)
        await _create(client, "A", todo.id)

        resp = await client.get(f"/api/tasks/column/{todo.id}")
        assert [t["name"] for t in resp.json()] == ["A", "b"]

        resp = await client.delete(f"/api/tasks/{b['id']}")
        assert resp.status_code == 204
        resp = await client.get(f"/api/tasks/{b['id']}")
        assert resp.status_code == 404


@pytest.mark.anyio
class TestColumns:
    async def test_create_and_list(self, client) -> None:
        resp = await client.post("/api/columns", json={"name": "Review"})

        assert resp.status_code == 201
        assert resp.json()["sortOrder"] == 4
        assert resp.json()["tasks"] == []
        names = [c["name"] for c in (await client.get("/api/columns")).json()]
        assert names == ["To Do", "In Progress", "Done", "Review"]

    async def test_delete_rules(self, client, columns) -> None:
        todo, _, done = columns
        await _create(client, "blocker", todo.id)

        resp = await client.delete(f"/api/columns/{todo.id}")
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Cannot delete column with existing tasks"

        resp = await client.delete(f"/api/columns/{done.id}")
        assert resp.status_code == 204
        resp = await client.get(f"/api/columns/{done.id}")
        assert resp.status_code == 404


@pytest.mark.anyio
class TestAttachments:
    async def test_upload_download_delete(self, client, columns) -> None:
        todo, _, _ = columns
        task = await _create(client, "pictures", todo.id)

        resp = await client.post(
            f"/api/attachments/tasks/{task['id']}",
            files={"file": ("shot.png", PNG, "image/png")},
        )
        assert resp.status_code == 201, resp.text
        attachment = resp.json()
        assert attachment["fileName"] == "shot.png"
        assert attachment["fileSize"] == len(PNG)

        resp = await client.get(f"/api/attachments/{attachment['id']}/download")
        assert resp.status_code == 200
        assert resp.content == PNG
        assert resp.headers["content-type"] == "image/png"

        listed = (await client.get(f"/api/attachments/task/{task['id']}")).json()
        assert [a["id"] for a in listed] == [attachment["id"]]

        resp = await client.delete(f"/api/attachments/{attachment['id']}")
        assert resp.status_code == 204
        resp = await client.get(f"/api/attachments/{attachment['id']}/download")
        assert resp.status_code == 404

    async def test_upload_rejects_other_types(self, client, columns) -> None:
        todo, _, _ = columns
        task = await _create(client, "docs", todo.id)

        resp = await client.post(
            f"/api/attachments/tasks/{task['id']}",
            files={"file": ("report.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert resp.status_code == 400
