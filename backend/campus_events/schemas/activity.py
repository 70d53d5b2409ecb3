from datetime import datetime
from typing import Any

from campus_events.schemas.base import ApiModel


class ActivityEntryResponse(ApiModel):
    id: int
    type: str
    payload: dict[str, Any]
    created_at: datetime
