"""Unit tests for FanoutService."""

from uuid import uuid4

import pytest

from relay.adapter.realtime import InMemoryConnectionRegistry
from relay.domain.service import FanoutService
from relay.domain.value import DeliveryStatus, EventCriteria, UserId
from relay.persistence.repository.inmemory import InMemoryEventStore
from tests.factories import make_event
from tests.fakes import (
    ClosedChannel,
    FlakyEventLogRepository,
    RecordingChannel,
    SlowChannel,
)


def _users(n: int) -> list[UserId]:
    return [UserId(uuid4()) for _ in range(n)]


@pytest.fixture
def store():
    return InMemoryEventStore()


@pytest.fixture
def event_log(store):
    return FlakyEventLogRepository(store=store)


@pytest.fixture
def registry():
    return InMemoryConnectionRegistry()


@pytest.fixture
def fanout_service(event_log, registry):
    return FanoutService(event_log, registry, live_send_timeout=0.05)


async def _log_ids(event_log, recipient_id):
    events = await event_log.find_for_recipient(EventCriteria(recipient_id=recipient_id))
    return [e.id for e in events]


class TestPublish:
    """Tests for publish."""

    @pytest.mark.asyncio
    async def test_online_recipients_get_live_push_and_log_entry(
        self, fanout_service, event_log, registry
    ):
        """Task assigned to two connected users is pushed and stored for both."""
        # Arrange
        alice, bob = _users(2)
        alice_channel, bob_channel = RecordingChannel(), RecordingChannel()
        await registry.register(alice, alice_channel)
        await registry.register(bob, bob_channel)
        event = make_event([alice, bob])

        # Act
        report = await fanout_service.publish(event)

        # Assert
        assert report.ok
        assert report.statuses == {
            alice: DeliveryStatus.DELIVERED_LIVE,
            bob: DeliveryStatus.DELIVERED_LIVE,
        }
        assert alice_channel.messages == [event.to_envelope()]
        assert bob_channel.messages == [event.to_envelope()]
        assert await _log_ids(event_log, alice) == [event.id]
        assert await _log_ids(event_log, bob) == [event.id]

    @pytest.mark.asyncio
    async def test_offline_recipient_is_queued(self, fanout_service, event_log):
        """An offline user still gets the event in their log."""
        # Arrange
        (carol,) = _users(1)
        event = make_event([carol])

        # Act
        report = await fanout_service.publish(event)

        # Assert
        assert report.ok
        assert report.statuses == {carol: DeliveryStatus.QUEUED}
        assert await _log_ids(event_log, carol) == [event.id]

    @pytest.mark.asyncio
    async def test_closed_channel_falls_back_to_queued(
        self, fanout_service, event_log, registry
    ):
        """A send error is swallowed, the channel dropped and the event queued."""
        # Arrange
        alice, bob = _users(2)
        await registry.register(alice, ClosedChannel())
        bob_channel = RecordingChannel()
        await registry.register(bob, bob_channel)
        event = make_event([alice, bob])

        # Act
        report = await fanout_service.publish(event)

        # Assert
        assert report.ok
        assert report.statuses[alice] == DeliveryStatus.QUEUED
        assert report.statuses[bob] == DeliveryStatus.DELIVERED_LIVE
        assert await registry.lookup(alice) is None
        assert await _log_ids(event_log, alice) == [event.id]

    @pytest.mark.asyncio
    async def test_slow_channel_times_out_without_blocking_others(
        self, fanout_service, registry
    ):
        """A stalled socket is abandoned after the timeout."""
        # Arrange
        slow_user, fast_user = _users(2)
        slow_channel, fast_channel = SlowChannel(), RecordingChannel()
        await registry.register(slow_user, slow_channel)
        await registry.register(fast_user, fast_channel)
        event = make_event([slow_user, fast_user])

        # Act
        report = await fanout_service.publish(event)

        # Assert
        assert report.statuses[slow_user] == DeliveryStatus.QUEUED
        assert report.statuses[fast_user] == DeliveryStatus.DELIVERED_LIVE
        assert slow_channel.cancelled
        assert len(fast_channel.messages) == 1

    @pytest.mark.asyncio
    async def test_store_failure_is_reported_and_others_continue(
        self, fanout_service, event_log, registry
    ):
        """A failed append marks only that recipient as failed."""
        # Arrange
        alice, bob, carol = _users(3)
        event_log.failing = {bob}
        bob_channel = RecordingChannel()
        await registry.register(bob, bob_channel)
        event = make_event([alice, bob, carol])

        # Act
        report = await fanout_service.publish(event)

        # Assert
        assert not report.ok
        assert report.statuses == {
            alice: DeliveryStatus.QUEUED,
            bob: DeliveryStatus.FAILED,
            carol: DeliveryStatus.QUEUED,
        }
        assert report.failed_recipients == [bob]
        assert [e.recipient_id for e in report.errors] == [bob]
        assert "connection reset" in report.errors[0].reason
        # An event that was not stored is never pushed
        assert bob_channel.messages == []
        assert await _log_ids(event_log, carol) == [event.id]

    @pytest.mark.asyncio
    async def test_appends_once_per_recipient_in_order(
        self, fanout_service, event_log
    ):
        """The log is written exactly once per recipient, in recipient order."""
        # Arrange
        recipients = _users(5)
        event = make_event(recipients + [recipients[0]])

        # Act
        await fanout_service.publish(event)

        # Assert
        assert event_log.attempts == recipients

    @pytest.mark.asyncio
    async def test_publish_keeps_per_recipient_order(self, fanout_service, event_log):
        """Two events to the same recipient are logged in publish order."""
        # Arrange
        (dave,) = _users(1)
        first = make_event([dave], minute=0)
        second = make_event([dave], minute=1)

        # Act
        await fanout_service.publish(first)
        await fanout_service.publish(second)

        # Assert
        assert await _log_ids(event_log, dave) == [first.id, second.id]


class TestPublishTo:
    """Tests for publish_to."""

    @pytest.mark.asyncio
    async def test_retry_failed_recipients(self, fanout_service, event_log):
        """Recipients that failed can be retried without duplicating others."""
        # Arrange
        alice, bob = _users(2)
        event_log.failing = {bob}
        event = make_event([alice, bob])
        first = await fanout_service.publish(event)
        event_log.failing = set()

        # Act
        retry = await fanout_service.publish_to(event, first.failed_recipients)

        # Assert
        assert retry.ok
        assert retry.statuses == {bob: DeliveryStatus.QUEUED}
        assert await _log_ids(event_log, alice) == [event.id]
        assert await _log_ids(event_log, bob) == [event.id]

    @pytest.mark.asyncio
    async def test_republish_is_idempotent(self, fanout_service, event_log):
        """Appending the same event twice leaves one log entry."""
        # Arrange
        (alice,) = _users(1)
        event = make_event([alice])
        await fanout_service.publish(event)

        # Act
        await fanout_service.publish_to(event, [alice])

        # Assert
        assert await _log_ids(event_log, alice) == [event.id]
