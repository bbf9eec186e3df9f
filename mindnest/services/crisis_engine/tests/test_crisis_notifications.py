"""Tests for CrisisNotification and CrisisNotificationPublisher.

Publishing must never raise: the user-facing crisis response happens even
when the stream is down.
"""
import json
import pytest
from unittest.mock import MagicMock, patch

from mindnest.shared.models import ContextTag, CrisisSeverity, CrisisSignal
from mindnest.services.crisis_engine.notifications import (
    CrisisNotification,
    CrisisNotificationPublisher,
)


@pytest.fixture
def signal():
    return CrisisSignal(
        severity=CrisisSeverity.CRITICAL,
        matched_phrase_count=3,
        escalate=True,
        source_excerpt="I can't go on...",
        matched_phrases=("cant go on", "hopeless", "overdose"),
    )


class TestCrisisNotification:
    """Tests for CrisisNotification."""

    def test_from_signal(self, signal):
        notification = CrisisNotification.from_signal(signal, "hash_abc", ContextTag.JOURNAL)

        assert notification.notification_id.startswith("ntf_")
        assert notification.severity == "critical"
        assert notification.escalate is True
        assert notification.source_excerpt == "I can't go on..."
        assert notification.originating_user_id_hash == "hash_abc"
        assert notification.context_tag == "journal"
        assert notification.priority == "urgent"
        assert notification.timestamp == signal.detected_at

    def test_to_payload(self, signal):
        payload = CrisisNotification.from_signal(
            signal, "hash_abc", ContextTag.CHAT
        ).to_payload()

        assert payload["event_type"] == "analysis.crisis.detected"
        assert payload["source"] == "analysis-service"
        assert payload["timestamp"].endswith("Z")
        assert payload["data"] == {
            "severity": "critical",
            "escalate": True,
            "source_excerpt": "I can't go on...",
            "originating_user_id_hash": "hash_abc",
            "context": "chat",
        }
        assert payload["display"]["title"] == "Crisis Support Available"
        assert payload["display"]["action_url"] == "/chat"

    def test_notification_is_immutable(self, signal):
        notification = CrisisNotification.from_signal(signal, "h", ContextTag.CHAT)
        with pytest.raises(Exception):  # FrozenInstanceError
            notification.severity = "medium"


class TestCrisisNotificationPublisher:
    """Tests for CrisisNotificationPublisher."""

    def test_initialization(self):
        publisher = CrisisNotificationPublisher(
            stream_name="test-stream", enabled=True, region="us-west-2"
        )
        assert publisher.stream_name == "test-stream"
        assert publisher.enabled is True
        assert publisher.region == "us-west-2"

    def test_disabled_returns_false(self, signal):
        publisher = CrisisNotificationPublisher(enabled=False)
        assert publisher.publish(signal, "hash_abc", ContextTag.CHAT) is False
        assert publisher.kinesis_client is None

    def test_publish_success(self, signal):
        mock_kinesis = MagicMock()
        mock_kinesis.put_record.return_value = {
            "ShardId": "shard-001",
            "SequenceNumber": "12345",
        }
        publisher = CrisisNotificationPublisher(stream_name="test-stream")
        publisher._kinesis_client = mock_kinesis

        assert publisher.publish(signal, "hash_abc", ContextTag.JOURNAL) is True

        call_kwargs = mock_kinesis.put_record.call_args.kwargs
        assert call_kwargs["StreamName"] == "test-stream"
        assert call_kwargs["PartitionKey"] == "hash_abc"
        data = json.loads(call_kwargs["Data"])
        assert data["data"]["severity"] == "critical"
        assert data["data"]["escalate"] is True

    def test_publish_failure_returns_false(self, signal):
        mock_kinesis = MagicMock()
        mock_kinesis.put_record.side_effect = Exception("Kinesis unavailable")
        publisher = CrisisNotificationPublisher()
        publisher._kinesis_client = mock_kinesis

        assert publisher.publish(signal, "hash_abc", ContextTag.CHAT) is False

    @patch("boto3.client")
    def test_client_init_failure_falls_back_to_log(self, mock_boto_client, signal):
        mock_boto_client.side_effect = Exception("no credentials")
        publisher = CrisisNotificationPublisher()

        assert publisher.publish(signal, "hash_abc", ContextTag.COMMUNITY) is False

    @patch("boto3.client")
    def test_client_created_lazily(self, mock_boto_client):
        publisher = CrisisNotificationPublisher(region="eu-west-1")
        mock_boto_client.assert_not_called()

        _ = publisher.kinesis_client
        mock_boto_client.assert_called_once_with("kinesis", region_name="eu-west-1")
