"""Tests for the task HTTP API."""

from fastapi.testclient import TestClient

from taskkeeper.errors import StoreError
from taskkeeper.main import create_app

from .fakes import InMemoryTaskStore


def create(client, **body):
    response = client.post("/api/tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthEndpoint:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "taskkeeper"}


class TestCreateTask:
    def test_create_returns_created_task(self, client):
        data = create(client, taskName="Write report", dueDate="2024-05-08T09:00:00Z")

        assert data["id"]
        assert data["taskName"] == "Write report"
        assert data["description"] is None
        assert data["status"] == "PENDING"
        assert data["createdAt"]
        assert data["dueDate"].startswith("2024-05-08T09:00:00")

    def test_create_accepts_snake_case_fields(self, client):
        data = create(client, task_name="Snake", description="case")
        assert (data["taskName"], data["description"]) == ("Snake", "case")

    def test_create_blank_name_is_client_error(self, client):
        response = client.post("/api/tasks", json={"taskName": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Task name cannot be empty"
        assert client.get("/api/tasks").json()["count"] == 0

    def test_create_missing_name_is_client_error(self, client):
        response = client.post("/api/tasks", json={"description": "no name"})
        assert response.status_code == 400

    def test_create_overlong_name_is_client_error(self, client):
        response = client.post("/api/tasks", json={"taskName": "x" * 501})
        assert response.status_code == 400


class TestReadTasks:
    def test_get_by_id(self, client):
        created = create(client, taskName="One")

        response = client.get(f"/api/tasks/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown_id_is_not_found(self, client):
        response = client.get("/api/tasks/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found with id: nope"

    def test_list_empty(self, client):
        response = client.get("/api/tasks")

        assert response.status_code == 200
        assert response.json() == {"tasks": [], "count": 0}

    def test_list_all(self, client):
        create(client, taskName="One")
        create(client, taskName="Two")

        data = client.get("/api/tasks").json()

        assert data["count"] == 2
        assert {t["taskName"] for t in data["tasks"]} == {"One", "Two"}

    def test_list_filtered_by_status(self, client):
        first = create(client, taskName="One")
        create(client, taskName="Two")
        client.patch(f"/api/tasks/{first['id']}/status", params={"status": "DONE"})

        for url in ("/api/tasks", "/api/tasks/filter/status"):
            data = client.get(url, params={"status": "DONE"}).json()
            assert [t["id"] for t in data["tasks"]] == [first["id"]]

        empty = client.get("/api/tasks/filter/status", params={"status": "IN_PROGRESS"})
        assert empty.status_code == 200
        assert empty.json()["count"] == 0

    def test_list_invalid_status_is_client_error(self, client):
        assert client.get("/api/tasks", params={"status": "ARCHIVED"}).status_code == 400
        assert client.get("/api/tasks/filter/status", params={"status": "nope"}).status_code == 400
        assert client.get("/api/tasks/filter/status").status_code == 400


class TestUpdateTask:
    def test_partial_update_changes_only_given_fields(self, client):
        created = create(client, taskName="One", description="first", dueDate="2024-05-08T09:00:00Z")

        response = client.patch(f"/api/tasks/{created['id']}", json={"description": "second"})

        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "second"
        for field in ("id", "taskName", "status", "createdAt", "dueDate"):
            assert data[field] == created[field]

    def test_put_is_accepted(self, client):
        created = create(client, taskName="One")

        response = client.put(f"/api/tasks/{created['id']}", json={"taskName": "Renamed"})

        assert response.status_code == 200
        assert response.json()["taskName"] == "Renamed"

    def test_status_in_body_is_ignored(self, client):
        created = create(client, taskName="One")

        data = client.put(f"/api/tasks/{created['id']}", json={"status": "DONE"}).json()

        assert data == created

    def test_update_blank_name_is_client_error(self, client):
        created = create(client, taskName="One")

        response = client.patch(f"/api/tasks/{created['id']}", json={"taskName": ""})

        assert response.status_code == 400
        assert client.get(f"/api/tasks/{created['id']}").json()["taskName"] == "One"

    def test_update_unknown_is_not_found(self, client):
        assert client.patch("/api/tasks/nope", json={"taskName": "x"}).status_code == 404


class TestUpdateTaskStatus:
    def test_update_status(self, client):
        created = create(client, taskName="One")

        response = client.patch(f"/api/tasks/{created['id']}/status", params={"status": "IN_PROGRESS"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "IN_PROGRESS"
        assert {k: v for k, v in data.items() if k != "status"} == {
            k: v for k, v in created.items() if k != "status"
        }

    def test_update_status_invalid_value(self, client):
        created = create(client, taskName="One")
        response = client.patch(f"/api/tasks/{created['id']}/status", params={"status": "ARCHIVED"})
        assert response.status_code == 400

    def test_update_status_unknown_task(self, client):
        response = client.patch("/api/tasks/nope/status", params={"status": "DONE"})
        assert response.status_code == 404


class TestDeleteTask:
    def test_delete(self, client):
        created = create(client, taskName="One")

        response = client.delete(f"/api/tasks/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/tasks/{created['id']}").status_code == 404
        assert client.get("/api/tasks").json()["count"] == 0

    def test_delete_unknown_is_not_found(self, client):
        assert client.delete("/api/tasks/nope").status_code == 404


class TestStoreFailure:
    def test_store_error_is_server_error(self, settings):
        store = InMemoryTaskStore()

        def broken_find_all():
            raise StoreError("disk on fire")

        store.find_all = broken_find_all

        with TestClient(create_app(settings, store=store)) as client:
            response = client.get("/api/tasks")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}


def test_scenario_end_to_end(client):
    created = create(client, taskName="Write report", dueDate="2024-05-08T09:00:00Z")
    task_url = f"/api/tasks/{created['id']}"
    assert created["status"] == "PENDING"
    assert created["description"] is None

    started = client.patch(f"{task_url}/status", params={"status": "IN_PROGRESS"}).json()
    assert started["status"] == "IN_PROGRESS"
    assert started["taskName"] == "Write report"

    described = client.put(task_url, json={"description": "draft done"}).json()
    assert described["description"] == "draft done"
    assert described["status"] == "IN_PROGRESS"

    assert client.delete(task_url).status_code == 204
    assert client.get(task_url).status_code == 404
