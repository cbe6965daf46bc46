"""
NATS JetStream Client for Python Microservices

Provides the event envelope and the JetStream-backed event bus used by
services to publish domain events.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

import nats
from nats.aio.client import Client as NATS
from nats.js import JetStreamContext

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types published on the bus"""

    # Crowdfund Events
    PROJECT_CREATED = "crowdfund.project.created"
    CONTRIBUTION_RECEIVED = "crowdfund.contribution.received"
    PROJECT_COMPLETED = "crowdfund.project.completed"
    FUNDS_WITHDRAWN = "crowdfund.funds.withdrawn"


class ServiceSource(Enum):
    """Service sources"""

    CROWDFUND_SERVICE = "crowdfund_service"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event


class NATSEventBus:
    """
    NATS JetStream event bus.

    Streams are named after the first segment of the event type
    (``crowdfund.project.created`` -> ``crowdfund-stream``).
    """

    def __init__(self, service_name: str, nats_url: str = "nats://localhost:4222"):
        self.service_name = service_name
        self.nats_url = nats_url

        self._client: Optional[NATS] = None
        self._js: Optional[JetStreamContext] = None
        self._streams: Dict[str, bool] = {}
        self._is_connected = False

        logger.info(f"NATS EventBus initialized: {self.nats_url}")

    async def connect(self):
        """Connect to NATS and open a JetStream context"""
        try:
            self._client = await nats.connect(
                servers=[self.nats_url],
                name=self.service_name,
            )
            self._js = self._client.jetstream()
            self._is_connected = True
            logger.info(f"Connected to NATS as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise

    async def publish_event(self, event: Event) -> bool:
        """
        Publish an event to NATS JetStream.

        The event type is used as subject; the stream is created on first use.
        """
        if not self._is_connected or not self._js:
            logger.error("Not connected to NATS")
            return False

        try:
            subject = event.type
            data = json.dumps(event.to_dict()).encode()

            stream_name = self._get_stream_name_for_event(event.type)
            await self._ensure_stream(stream_name, event.type)

            ack = await self._js.publish(subject, data)
            logger.info(f"Published event {event.type} [{event.id}] to stream {stream_name}, seq={ack.seq}")
            return True

        except Exception as e:
            logger.error(f"Error publishing event {event.id}: {e}")
            return False

    async def _ensure_stream(self, stream_name: str, event_type: str) -> None:
        if self._streams.get(stream_name):
            return
        subject_prefix = event_type.split('.')[0]
        try:
            await self._js.add_stream(name=stream_name, subjects=[f"{subject_prefix}.>"])
        except Exception as e:
            logger.debug(f"Stream creation note: {e}")
        self._streams[stream_name] = True

    def _get_stream_name_for_event(self, event_type: str) -> str:
        """Determine the JetStream stream name based on event type"""
        prefix = event_type.split('.')[0]
        return f"{prefix}-stream"

    async def close(self):
        """Drain and close the NATS connection"""
        if self._client:
            await self._client.drain()
            self._client = None
            self._js = None

        self._is_connected = False
        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS"""
        return self._is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(service_name: str, nats_url: str = "nats://localhost:4222") -> NATSEventBus:
    """
    Get or create event bus instance.

    Args:
        service_name: Name of the service using the event bus
        nats_url: NATS server URL

    Returns:
        Connected NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None:
        event_bus = NATSEventBus(service_name=service_name, nats_url=nats_url)
        await event_bus.connect()
        _event_bus = event_bus

    return _event_bus


async def close_event_bus() -> None:
    """Close and drop the shared event bus instance"""
    global _event_bus

    if _event_bus is not None:
        await _event_bus.close()
        _event_bus = None
