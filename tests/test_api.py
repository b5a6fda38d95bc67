"""HTTP tests for the v1 endpoints."""
from fastapi.testclient import TestClient

from chat_room_api.app.core.db import Store
from chat_room_api.app.main import create_app


def join(client, name):
    response = client.post("/participants", json={"name": name})
    assert response.status_code == 201
    return response


class TestParticipantsEndpoint:

    def test_register(self, client):
        response = join(client, "alice")

        body = response.json()
        assert body["name"] == "alice"
        assert isinstance(body["lastStatus"], int)

    def test_register_duplicate(self, client):
        join(client, "alice")

        response = client.post("/participants", json={"name": "alice"})

        assert response.status_code == 409
        assert len(client.get("/participants").json()) == 1

    def test_register_invalid_writes_nothing(self, client):
        for payload in ({}, {"name": ""}):
            response = client.post("/participants", json=payload)
            assert response.status_code == 422
            assert isinstance(response.json()["detail"], list)

        assert client.get("/participants").json() == []
        assert client.get("/messages", headers={"user": "bob"}).json() == []

    def test_list(self, client):
        join(client, "alice")
        join(client, "bob")

        response = client.get("/participants")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["alice", "bob"]
        assert set(response.json()[0]) == {"name", "lastStatus"}


class TestMessagesEndpoint:

    def test_post_requires_header(self, client):
        response = client.post("/messages", json={"to": "Todos", "text": "hi", "type": "message"})

        assert response.status_code == 422

    def test_post_reports_every_violation(self, client):
        join(client, "alice")

        response = client.post("/messages", json={"type": "shout"}, headers={"user": "alice"})

        assert response.status_code == 422
        assert len(response.json()["detail"]) == 3

    def test_post_from_unregistered_sender(self, client):
        response = client.post(
            "/messages",
            json={"to": "Todos", "text": "boo", "type": "message"},
            headers={"user": "ghost"},
        )

        assert response.status_code == 422
        assert client.get("/messages", headers={"user": "ghost"}).json() == []

    def test_post_and_read(self, client):
        join(client, "alice")

        response = client.post(
            "/messages",
            json={"to": "Todos", "text": "hello", "type": "message"},
            headers={"user": "alice"},
        )

        assert response.status_code == 201
        latest = client.get("/messages", params={"limit": 1}, headers={"user": "bob"}).json()
        assert len(latest) == 1
        assert latest[0]["from"] == "alice"
        assert latest[0]["text"] == "hello"
        assert set(latest[0]) == {"from", "to", "text", "type", "time"}

    def test_private_message_visibility(self, client):
        for name in ("alice", "bob", "carol"):
            join(client, name)
        client.post(
            "/messages",
            json={"to": "bob", "text": "secret", "type": "private_message"},
            headers={"user": "alice"},
        )

        carol_sees = [m["text"] for m in client.get("/messages", headers={"user": "carol"}).json()]
        bob_sees = [m["text"] for m in client.get("/messages", headers={"user": "bob"}).json()]

        assert "secret" not in carol_sees
        assert "secret" in bob_sees

    def test_read_requires_header(self, client):
        assert client.get("/messages").status_code == 422

    def test_read_invalid_limit(self, client):
        for limit in ("abc", "0", "-3"):
            response = client.get("/messages", params={"limit": limit}, headers={"user": "alice"})
            assert response.status_code == 422

    def test_read_huge_limit(self, client):
        join(client, "alice")

        for limit in ("1e19", "99999999999999999999"):
            response = client.get("/messages", params={"limit": limit}, headers={"user": "alice"})
            assert response.status_code == 200
            assert len(response.json()) == 1

    def test_user_header_is_stripped(self, client):
        join(client, "alice")

        response = client.post(
            "/messages",
            json={"to": "Todos", "text": "hi", "type": "message"},
            headers={"user": " alice "},
        )

        assert response.status_code == 201
        assert response.json()["from"] == "alice"
        assert client.get("/messages", headers={"user": "alice "}).status_code == 200


class TestStatusEndpoint:

    def test_heartbeat(self, client):
        join(client, "alice")

        assert client.post("/status", headers={"user": "alice"}).status_code == 200

    def test_heartbeat_unknown_user(self, client):
        assert client.post("/status", headers={"user": "ghost"}).status_code == 404

    def test_heartbeat_missing_header(self, client):
        assert client.post("/status").status_code == 404

    def test_heartbeat_header_is_stripped(self, client):
        join(client, "alice")

        assert client.post("/status", headers={"user": " alice "}).status_code == 200

    def test_blank_header_counts_as_missing(self, client):
        assert client.post("/status", headers={"user": "   "}).status_code == 404


class TestStoreUnavailable:

    def test_store_endpoints_fail_loudly(self, tmp_path, test_settings):
        # A directory cannot be opened as a database file.
        app = create_app(config=test_settings, store=Store(str(tmp_path)))

        with TestClient(app) as client:
            assert client.get("/health").json() == {"status": "ok", "store": "down"}
            assert client.get("/participants").status_code == 500
            assert client.post("/participants", json={"name": "alice"}).status_code == 500
            assert client.post("/status", headers={"user": "alice"}).status_code == 500

    def test_health_reports_store_up(self, client):
        assert client.get("/health").json() == {"status": "ok", "store": "up"}
