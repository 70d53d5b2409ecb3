"""
Activity sink interface.
An activity sink is a best-effort destination for audit entries.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from campus_events.db.base import utcnow
from campus_events.models.activity import ActivityType


@dataclass(frozen=True)
class ActivityRecord:
    type: ActivityType
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "payload": self.payload,
            "createdAt": self.created_at.isoformat(),
        }


class ActivitySink(ABC):
    """
    Interface for activity destinations.

    Implementations:
    - DatabaseActivitySink: persists entries, the source of the feed
    - RedisActivitySink: publishes entries to live subscribers
    """

    name: str = "sink"

    @abstractmethod
    async def write(self, record: ActivityRecord) -> None:
        """
        Deliver one record. May raise; the caller isolates failures.
        """
        pass
