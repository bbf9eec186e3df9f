"""Forwards crisis signals to the alerting subsystem.

The analysis engine only returns CrisisSignal values. The calling shell
turns them into notifications and publishes them to a Kinesis stream,
where the alerting side handles delivery, emergency contacts and
resolution tracking.

Publishing never raises: a failed publish is logged at CRITICAL with the
full payload so it can be processed by hand, and the user still sees the
crisis resources.
"""
import json
import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from mindnest.shared.models import ContextTag, CrisisSignal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrisisNotification:
    """Immutable notification built from a CrisisSignal."""
    notification_id: str
    severity: str
    escalate: bool
    source_excerpt: str
    originating_user_id_hash: str
    context_tag: str
    event_type: str = "analysis.crisis.detected"
    title: str = "Crisis Support Available"
    message: str = (
        "We detected you might need support. Crisis resources are available 24/7."
    )
    priority: str = "urgent"
    action_url: str = "/chat"
    timestamp: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_signal(
        cls,
        signal: CrisisSignal,
        user_id_hash: str,
        context_tag: ContextTag,
    ) -> "CrisisNotification":
        return cls(
            notification_id=f"ntf_{uuid.uuid4().hex[:12]}",
            severity=signal.severity.value,
            escalate=signal.escalate,
            source_excerpt=signal.source_excerpt,
            originating_user_id_hash=user_id_hash,
            context_tag=context_tag.value,
            timestamp=signal.detected_at,
        )

    def to_payload(self) -> dict:
        """Convert to Kinesis record payload."""
        return {
            "notification_id": self.notification_id,
            "event_type": self.event_type,
            "timestamp": self.timestamp.isoformat() + "Z",
            "source": "analysis-service",
            "data": {
                "severity": self.severity,
                "escalate": self.escalate,
                "source_excerpt": self.source_excerpt,
                "originating_user_id_hash": self.originating_user_id_hash,
                "context": self.context_tag,
            },
            "display": {
                "title": self.title,
                "message": self.message,
                "priority": self.priority,
                "action_url": self.action_url,
            },
        }


class CrisisNotificationPublisher:
    """Publishes crisis notifications to a Kinesis stream."""

    def __init__(
        self,
        stream_name: str = "mindnest-crisis-notifications",
        enabled: bool = True,
        region: Optional[str] = None,
    ):
        """Initialize publisher.

        Args:
            stream_name: Kinesis stream name
            enabled: Whether publishing is enabled (disable for local dev)
            region: AWS region (defaults to AWS_REGION env var)
        """
        self.stream_name = stream_name
        self.enabled = enabled
        self.region = region or os.getenv("AWS_REGION", "us-east-1")
        self._kinesis_client = None

        logger.info(
            "CRISIS_NOTIFICATION_PUBLISHER_INITIALIZED",
            extra={
                "stream_name": stream_name,
                "enabled": enabled,
                "region": self.region,
            }
        )

    @property
    def kinesis_client(self):
        """Lazy initialization of Kinesis client."""
        if self._kinesis_client is None and self.enabled:
            try:
                import boto3
                self._kinesis_client = boto3.client(
                    "kinesis",
                    region_name=self.region,
                )
            except Exception as e:
                logger.error(
                    "KINESIS_CLIENT_INIT_FAILED",
                    extra={"error": str(e)}
                )
        return self._kinesis_client

    def publish(
        self,
        signal: CrisisSignal,
        user_id_hash: str,
        context_tag: ContextTag,
    ) -> bool:
        """Publish a notification for a crisis signal.

        Args:
            signal: Signal returned by the analysis engine
            user_id_hash: Hashed originating user id
            context_tag: Surface the text came from

        Returns:
            True if published successfully, False otherwise
        """
        notification = CrisisNotification.from_signal(signal, user_id_hash, context_tag)

        if not self.enabled:
            logger.info(
                "CRISIS_NOTIFICATION_SKIPPED",
                extra={
                    "notification_id": notification.notification_id,
                    "reason": "publishing_disabled",
                }
            )
            return False

        payload = notification.to_payload()

        try:
            if self.kinesis_client is None:
                logger.critical(
                    "CRISIS_NOTIFICATION_FALLBACK_LOG",
                    extra={
                        "notification_id": notification.notification_id,
                        "payload": json.dumps(payload),
                        "reason": "kinesis_client_unavailable",
                        "action": "MANUAL_PROCESSING_REQUIRED",
                    }
                )
                return False

            response = self.kinesis_client.put_record(
                StreamName=self.stream_name,
                Data=json.dumps(payload),
                PartitionKey=user_id_hash,
            )

            logger.critical(
                "CRISIS_NOTIFICATION_PUBLISHED",
                extra={
                    "notification_id": notification.notification_id,
                    "user_id_hash": user_id_hash,
                    "severity": notification.severity,
                    "escalate": notification.escalate,
                    "shard_id": response.get("ShardId"),
                    "sequence_number": response.get("SequenceNumber"),
                }
            )
            return True

        except Exception as e:
            logger.critical(
                "CRISIS_NOTIFICATION_PUBLISH_FAILED",
                extra={
                    "notification_id": notification.notification_id,
                    "user_id_hash": user_id_hash,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "action": "MANUAL_REVIEW_REQUIRED",
                    "payload": json.dumps(payload),
                }
            )
            return False
