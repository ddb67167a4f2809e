"""End-to-end tests for comment endpoints."""

from uuid import uuid4

from dishka import Provider, Scope, provide
from fastapi.testclient import TestClient

from relay.domain.repository import EventLogRepository
from relay.domain.value import UserId
from relay.interface.api.app import create_app
from relay.persistence.repository.inmemory import InMemoryEventStore
from relay.util.di.container import setup_di
from tests.di import build_test_container
from tests.factories import auth_headers
from tests.fakes import FlakyEventLogRepository


def _create(client, thread_id, user_id, content="Hello", **extra):
    return client.post(
        f"/threads/{thread_id}/comments",
        json={"content": content, **extra},
        headers=auth_headers(user_id),
    )


class TestCommentEndpoints:
    """End-to-end tests for comment routes."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["live_connections"] == 0

    def test_create_requires_auth(self, client):
        response = client.post(
            f"/threads/{uuid4()}/comments", json={"content": "Hello"}
        )

        assert response.status_code == 401

    def test_create_and_fetch_tree(self, client):
        """Replies come back nested in creation order."""
        # Arrange
        thread_id = str(uuid4())
        user = UserId(uuid4())
        a = _create(client, thread_id, user, "A").json()["comment"]
        b = _create(client, thread_id, user, "B").json()["comment"]
        c = _create(client, thread_id, user, "C", parent_id=a["comment_id"]).json()[
            "comment"
        ]

        # Act
        response = client.get(f"/threads/{thread_id}/comments/tree")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [r["comment_id"] for r in data["roots"]] == [
            a["comment_id"],
            b["comment_id"],
        ]
        assert data["roots"][0]["replies"][0]["comment_id"] == c["comment_id"]

    def test_empty_thread(self, client):
        response = client.get(f"/threads/{uuid4()}/comments/tree")

        assert response.status_code == 200
        assert response.json()["roots"] == []
        assert response.json()["total"] == 0

    def test_invalid_parent_is_400(self, client):
        response = _create(
            client, uuid4(), UserId(uuid4()), "Reply", parent_id=str(uuid4())
        )

        assert response.status_code == 400

    def test_content_length_limit(self, client):
        response = _create(client, uuid4(), UserId(uuid4()), "x" * 2001)

        assert response.status_code == 422

    def test_edit_rules(self, client):
        """Author edits succeed; others get 403; frozen gives 409."""
        # Arrange
        author = UserId(uuid4())
        comment_id = _create(client, uuid4(), author, "Draft").json()["comment"][
            "comment_id"
        ]

        # Act
        edited = client.patch(
            f"/comments/{comment_id}",
            json={"content": "Final"},
            headers=auth_headers(author),
        )
        forbidden = client.patch(
            f"/comments/{comment_id}",
            json={"content": "Hijack"},
            headers=auth_headers(UserId(uuid4())),
        )
        frozen = client.post(
            f"/comments/{comment_id}/freeze", headers=auth_headers(author)
        )
        conflict = client.patch(
            f"/comments/{comment_id}",
            json={"content": "Too late"},
            headers=auth_headers(author),
        )

        # Assert
        assert edited.status_code == 200
        assert edited.json()["content"] == "Final"
        assert forbidden.status_code == 403
        assert frozen.json()["is_frozen"] is True
        assert conflict.status_code == 409
        assert client.get(f"/comments/{comment_id}").json()["content"] == "Final"

    def test_soft_then_hard_delete(self, client):
        # Arrange
        author = UserId(uuid4())
        thread_id = uuid4()
        comment_id = _create(client, thread_id, author, "Gone soon").json()[
            "comment"
        ]["comment_id"]

        # Act
        soft = client.delete(f"/comments/{comment_id}", headers=auth_headers(author))
        edit = client.patch(
            f"/comments/{comment_id}",
            json={"content": "Back"},
            headers=auth_headers(author),
        )
        tree = client.get(f"/threads/{thread_id}/comments/tree").json()
        hard = client.delete(
            f"/comments/{comment_id}?hard=true", headers=auth_headers(author)
        )

        # Assert
        assert soft.status_code == 200
        assert edit.status_code == 404
        assert tree["roots"][0]["content"] is None
        assert hard.json()["hard"] is True
        assert client.get(f"/comments/{comment_id}").status_code == 404

    def test_bad_comment_id_is_400(self, client):
        assert client.get("/comments/not-a-uuid").status_code == 400


class FlakyEventLogProvider(Provider):
    """Event log that cannot store events for the given users."""

    def __init__(self, failing: set[UserId]) -> None:
        super().__init__()
        self.failing = failing

    @provide(scope=Scope.APP)
    def get_event_log_repository(self, store: InMemoryEventStore) -> EventLogRepository:
        return FlakyEventLogRepository(failing=self.failing, store=store)


class TestCommentNotificationFailures:
    """Notification storage failures surface in the status code."""

    def test_unstored_notification_is_207(self):
        # Arrange
        author, ok_user, bad_user = (UserId(uuid4()) for _ in range(3))
        app_instance = create_app()
        setup_di(
            app_instance,
            build_test_container(overrides=(FlakyEventLogProvider({bad_user}),)),
        )

        with TestClient(app_instance) as client:
            # Act
            response = _create(
                client,
                uuid4(),
                author,
                notify_user_ids=[str(ok_user), str(bad_user)],
            )
            ok_events = client.get("/events", headers=auth_headers(ok_user))

        # Assert
        assert response.status_code == 207
        data = response.json()
        assert data["comment"]["content"] == "Hello"
        assert data["notified"][str(bad_user)] == "failed"
        assert data["notified"][str(ok_user)] == "queued"
        assert data["notification_errors"] == [str(bad_user)]
        assert len(ok_events.json()["items"]) == 1

    def test_all_notifications_stored_is_201(self, client):
        response = _create(
            client, uuid4(), UserId(uuid4()), notify_user_ids=[str(uuid4())]
        )

        assert response.status_code == 201
        assert response.json()["notification_errors"] == []
