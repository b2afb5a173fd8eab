from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from repofeed.models.event import EventStatus, EventType


class NormalizedEvent(BaseModel):
    """Provider-independent shape produced by the normalizer, ready to be stored."""

    type: EventType
    title: str
    summary: str = ""
    body: str = ""
    timestamp: datetime
    source_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: EventStatus = EventStatus.APPROVED
    pinned: bool = False

    def to_row(self) -> dict:
        """Column values for an Event row, enums flattened to their stored strings."""
        data = self.model_dump()
        data["type"] = self.type.value
        data["status"] = self.status.value
        return data
