from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from tasklist.main import create_app
from tasklist.repositories import Repository, get_repository

API = "/api/todos"


def assert_task_shape(task: dict):
    assert set(task) == {"id", "text", "completed"}
    assert isinstance(task["id"], int)
    assert isinstance(task["text"], str)
    assert isinstance(task["completed"], bool)


def create(client, text="Test Task"):
    res = client.post(API, json={"text": text})
    assert res.status_code == 201
    return res.json()


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.text == "OK"
        assert res.headers["content-type"].startswith("text/plain")


class TestCreate:
    def test_create_task(self, client):
        res = client.post(API, json={"text": "Buy milk"})
        assert res.status_code == 201
        task = res.json()
        assert_task_shape(task)
        assert task["text"] == "Buy milk"
        assert task["completed"] is False

    def test_create_stores_text_verbatim(self, client):
        task = create(client, "  read book  ")
        assert task["text"] == "  read book  "
        assert client.get(API).json() == [task]

    def test_create_accepts_whitespace_only_text(self, client):
        task = create(client, "   ")
        assert task["text"] == "   "
        assert task["completed"] is False

    def test_ids_are_strictly_increasing(self, client):
        ids = [create(client, f"Task {i}")["id"] for i in range(4)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 4

    def test_ids_not_reused_after_delete(self, client):
        first = create(client, "a")
        assert client.delete(f"{API}/{first['id']}").status_code == 204
        second = create(client, "b")
        assert second["id"] > first["id"]

    def test_duplicate_text_allowed(self, client):
        a = create(client, "same")
        b = create(client, "same")
        assert a["id"] != b["id"]

    def test_create_rejects_missing_or_empty_text(self, client):
        for payload in ({}, {"text": ""}, {"text": 5}, {"text": None}):
            res = client.post(API, json=payload)
            assert res.status_code == 400, payload
            body = res.json()
            assert body["error"] == "ValidationError"
            assert body["message"] == "Request validation failed"
            assert isinstance(body["detail"], list)
        # No mutation happened
        assert client.get(API).json() == []

    def test_create_rejects_non_json_body(self, client):
        res = client.post(API, content=b"not json", headers={"content-type": "application/json"})
        assert res.status_code == 400


class TestList:
    def test_list_empty(self, client):
        res = client.get(API)
        assert res.status_code == 200
        assert res.json() == []

    def test_list_ordered_by_id(self, client):
        a = create(client, "A")
        b = create(client, "B")
        items = client.get(API).json()
        assert [t["id"] for t in items] == [a["id"], b["id"]]
        assert [t["text"] for t in items] == ["A", "B"]

    def test_list_survives_app_restart(self, settings, client):
        create(client, "persisted")
        other = create_app(settings)
        try:
            rows = other.state.repository.list()
            assert [t.text for t in rows] == ["persisted"]
        finally:
            other.state.repository.dispose()


class TestUpdate:
    def test_toggle_twice_restores_value(self, client):
        task = create(client, "Toggle me")
        tid = task["id"]

        res1 = client.put(f"{API}/{tid}", json={"completed": True})
        assert res1.status_code == 200
        assert res1.json() == {"id": tid, "text": "Toggle me", "completed": True}

        res2 = client.put(f"{API}/{tid}", json={"completed": False})
        assert res2.status_code == 200
        assert res2.json() == task

    def test_update_text(self, client):
        tid = create(client, "Old")["id"]
        res = client.put(f"{API}/{tid}", json={"text": "New"})
        assert res.status_code == 200
        assert res.json() == {"id": tid, "text": "New", "completed": False}

    def test_update_not_found(self, client):
        res = client.put(f"{API}/424242", json={"completed": True})
        assert res.status_code == 404
        assert res.json()["detail"] == "Todo not found"

    def test_update_requires_a_field(self, client):
        tid = create(client)["id"]
        for payload in ({}, {"completed": None}):
            res = client.put(f"{API}/{tid}", json=payload)
            assert res.status_code == 400
        assert client.get(API).json()[0]["completed"] is False

    def test_update_rejects_non_boolean_completed(self, client):
        tid = create(client)["id"]
        res = client.put(f"{API}/{tid}", json={"completed": "maybe"})
        assert res.status_code == 400
        assert res.json()["error"] == "ValidationError"

    def test_update_rejects_non_integer_id(self, client):
        res = client.put(f"{API}/abc", json={"completed": True})
        assert res.status_code == 400

    def test_update_rejects_empty_text(self, client):
        tid = create(client, "keep")["id"]
        res = client.put(f"{API}/{tid}", json={"text": ""})
        assert res.status_code == 400
        assert client.get(API).json()[0]["text"] == "keep"

    def test_update_id_out_of_column_range_is_not_found(self, client):
        for tid in (2**70, 2**63, 0, -1):
            res = client.put(f"{API}/{tid}", json={"completed": True})
            assert res.status_code == 404, tid
            assert res.json()["detail"] == "Todo not found"


class TestDelete:
    def test_delete_todo(self, client):
        tid = create(client, "ToDelete")["id"]

        res_del = client.delete(f"{API}/{tid}")
        assert res_del.status_code == 204
        assert res_del.text == ""

        assert tid not in [t["id"] for t in client.get(API).json()]
        assert client.put(f"{API}/{tid}", json={"completed": True}).status_code == 404

        res_del_again = client.delete(f"{API}/{tid}")
        assert res_del_again.status_code == 404
        assert res_del_again.json()["detail"] == "Todo not found"

    def test_delete_id_out_of_column_range_is_not_found(self, client):
        create(client, "survivor")
        for tid in (2**70, 2**63, 0):
            res = client.delete(f"{API}/{tid}")
            assert res.status_code == 404, tid
        assert len(client.get(API).json()) == 1


class TestScenario:
    def test_end_to_end(self, client):
        res = client.post(API, json={"text": "buy milk"})
        assert res.status_code == 201
        assert res.json() == {"id": 1, "text": "buy milk", "completed": False}

        res = client.put(f"{API}/1", json={"completed": True})
        assert res.status_code == 200
        assert res.json() == {"id": 1, "text": "buy milk", "completed": True}

        res = client.get(API)
        assert res.json() == [{"id": 1, "text": "buy milk", "completed": True}]

        assert client.delete(f"{API}/1").status_code == 204
        assert client.get(API).json() == []
        assert client.delete(f"{API}/1").status_code == 404


class FailingRepository(Repository):
    def _fail(self):
        raise OperationalError("SELECT 1", {}, Exception("database is unreachable"))

    def list(self):
        self._fail()

    def create(self, data):
        self._fail()

    def update(self, task_id, data):
        self._fail()

    def delete(self, task_id):
        self._fail()


class BrokenRepository(FailingRepository):
    def _fail(self):
        raise RuntimeError("repository bug")


class TestServerFault:
    def test_storage_failure_returns_500(self, app, client):
        app.dependency_overrides[get_repository] = FailingRepository
        try:
            for res in (
                client.get(API),
                client.post(API, json={"text": "x"}),
                client.put(f"{API}/1", json={"completed": True}),
                client.delete(f"{API}/1"),
            ):
                assert res.status_code == 500
                assert res.json() == {"error": "ServerFault", "message": "Storage operation failed"}
        finally:
            app.dependency_overrides.clear()

    def test_unexpected_failure_returns_server_fault_json(self, app):
        app.dependency_overrides[get_repository] = BrokenRepository
        # The handler answers first; Starlette re-raises afterwards for the server to log.
        client = TestClient(app, raise_server_exceptions=False)
        try:
            res = client.get(API)
            assert res.status_code == 500
            assert res.json() == {"error": "ServerFault", "message": "Internal server error"}
        finally:
            app.dependency_overrides.clear()
