"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .activity_sink import ActivityRecord, ActivitySink

__all__ = ['ActivityRecord', 'ActivitySink']
