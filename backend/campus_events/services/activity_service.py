"""
Activity log: best-effort audit trail of state-changing operations.

Entries are dispatched as background tasks that run after the response
has been produced. Each sink is written independently and a failing sink
is logged and counted, never raised, so the primary operation's outcome
does not depend on the audit trail.
"""

from typing import Any, Optional

from fastapi import BackgroundTasks
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.logging import get_logger
from campus_events.core.metrics import record_activity_write
from campus_events.models.activity import ActivityEntry, ActivityType
from campus_events.services.interfaces.activity_sink import ActivityRecord, ActivitySink

logger = get_logger(__name__)


class ActivityLogger:
    def __init__(self, sinks: list[ActivitySink], background_tasks: Optional[BackgroundTasks] = None):
        self.sinks = sinks
        self.background_tasks = background_tasks

    def log(self, activity_type: ActivityType, payload: dict[str, Any]) -> None:
        """Schedule an entry. Without a task queue the entry is dropped with a warning."""
        record = ActivityRecord(type=activity_type, payload=payload)
        if self.background_tasks is None:
            logger.warning("activity_log_unscheduled", type=activity_type.value)
            return
        self.background_tasks.add_task(self.record, record)

    async def record(self, record: ActivityRecord) -> None:
        for sink in self.sinks:
            try:
                await sink.write(record)
            except Exception as e:
                record_activity_write(sink.name, ok=False)
                logger.error(
                    "activity_log_failed",
                    sink=sink.name,
                    type=record.type.value,
                    error=str(e),
                )
            else:
                record_activity_write(sink.name, ok=True)


async def list_activity(db: AsyncSession, limit: int = 50) -> list[ActivityEntry]:
    """Newest entries first."""
    result = await db.execute(
        select(ActivityEntry)
        .order_by(ActivityEntry.created_at.desc(), ActivityEntry.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
