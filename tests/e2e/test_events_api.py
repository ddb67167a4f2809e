"""End-to-end tests for event endpoints and live delivery."""

from uuid import uuid4

import pytest
from starlette.websockets import WebSocketDisconnect

from relay.domain.value import UserId
from tests.factories import auth_headers, user_token


def _publish(client, sender, recipients, kind="task_assigned", payload=None):
    return client.post(
        "/events",
        json={
            "kind": kind,
            "recipient_ids": [str(r) for r in recipients],
            "payload": payload or {"task_id": "T1"},
        },
        headers=auth_headers(sender),
    )


class TestEventEndpoints:
    """End-to-end tests for event routes."""

    def test_publish_requires_auth(self, client):
        response = client.post(
            "/events", json={"kind": "system", "recipient_ids": [str(uuid4())]}
        )

        assert response.status_code == 401

    def test_offline_recipient_catches_up(self, client):
        """An offline user finds queued events on the next pull."""
        # Arrange
        sender, recipient = UserId(uuid4()), UserId(uuid4())

        # Act
        published = _publish(client, sender, [recipient])
        pulled = client.get("/events", headers=auth_headers(recipient))

        # Assert
        assert published.status_code == 201
        assert published.json()["statuses"] == {str(recipient): "queued"}
        items = pulled.json()["items"]
        assert [i["event_id"] for i in items] == [published.json()["event_id"]]
        assert items[0]["sender_id"] == str(sender)
        assert items[0]["is_read"] is False
        assert pulled.json()["unread_count"] == 1

    def test_read_flow(self, client):
        """Mark read, unread count and read-all stay consistent."""
        # Arrange
        sender, recipient = UserId(uuid4()), UserId(uuid4())
        first = _publish(client, sender, [recipient]).json()["event_id"]
        _publish(client, sender, [recipient])
        _publish(client, sender, [recipient])
        headers = auth_headers(recipient)

        # Act
        marked = client.post(f"/events/{first}/read", headers=headers)
        again = client.post(f"/events/{first}/read", headers=headers)
        unread = client.get("/events?unread_only=true", headers=headers)
        count = client.get("/events/unread-count", headers=headers)
        all_read = client.post("/events/read-all", headers=headers)

        # Assert
        assert marked.json() == {"event_id": first, "newly_read": True, "unread_count": 2}
        assert again.json()["newly_read"] is False
        assert first not in [i["event_id"] for i in unread.json()["items"]]
        assert count.json() == {"unread_count": 2}
        assert all_read.json() == {"marked": 2, "unread_count": 0}

    def test_mark_read_of_someone_elses_event_is_404(self, client):
        sender, recipient = UserId(uuid4()), UserId(uuid4())
        event_id = _publish(client, sender, [recipient]).json()["event_id"]

        response = client.post(
            f"/events/{event_id}/read", headers=auth_headers(UserId(uuid4()))
        )

        assert response.status_code == 404

    def test_unknown_kind_is_422(self, client):
        response = _publish(client, UserId(uuid4()), [uuid4()], kind="party")

        assert response.status_code == 422

    def test_live_push_over_websocket(self, client):
        """A connected user gets the envelope pushed and it is still logged."""
        # Arrange
        sender, recipient = UserId(uuid4()), UserId(uuid4())

        with client.websocket_connect(f"/ws?token={user_token(recipient)}") as ws:
            ws.send_text("ping")
            assert ws.receive_json() == {"type": "pong"}

            # Act
            published = _publish(client, sender, [recipient], payload={"n": 1})
            envelope = ws.receive_json()

        # Assert
        assert published.json()["statuses"] == {str(recipient): "delivered_live"}
        assert envelope["type"] == "event"
        assert envelope["event"]["id"] == published.json()["event_id"]
        assert envelope["event"]["payload"] == {"n": 1}
        pulled = client.get("/events", headers=auth_headers(recipient)).json()
        assert [i["event_id"] for i in pulled["items"]] == [
            published.json()["event_id"]
        ]

    def test_websocket_rejects_missing_token(self, client):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/ws") as ws:
                ws.receive_text()

    def test_websocket_ignores_binary_frames(self, client):
        recipient = UserId(uuid4())

        with client.websocket_connect(f"/ws?token={user_token(recipient)}") as ws:
            ws.send_bytes(b"\x00\x01")
            ws.send_text("ping")

            assert ws.receive_json() == {"type": "pong"}

    def test_sender_sees_read_receipt(self, client):
        """Reading an event pushes a receipt to the connected sender."""
        # Arrange
        sender, reader = UserId(uuid4()), UserId(uuid4())
        event_id = _publish(client, sender, [reader]).json()["event_id"]

        with client.websocket_connect(f"/ws?token={user_token(sender)}") as ws:
            # Act
            marked = client.post(
                f"/events/{event_id}/read", headers=auth_headers(reader)
            )
            receipt = ws.receive_json()

        # Assert
        assert marked.status_code == 200
        assert receipt["type"] == "read_receipt"
        assert receipt["event_id"] == event_id
        assert receipt["reader_id"] == str(reader)
