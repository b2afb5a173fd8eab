import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, DateTime, JSON
from sqlmodel import Field, UniqueConstraint

from repofeed.models.base_model import BaseModel


class EventType(str, enum.Enum):
    COMMIT = "commit"
    RELEASE = "release"
    PR_MERGE = "pr_merge"
    PR_CLOSED = "pr_closed"
    REPO_UPDATE = "repo_update"
    ISSUE = "issue"
    ISSUE_CLOSED = "issue_closed"


class EventStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Event(BaseModel, table=True):
    __tablename__ = "events"
    __table_args__ = (
        UniqueConstraint(
            "repo_id", "github_event_id", "type", name="uq_events_repo_event_type"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True, index=True)
    repo_id: int = Field(foreign_key="repos.id", index=True)
    type: str = Field(index=True)
    title: str
    summary: str = ""
    body: Optional[str] = None
    timestamp: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    source_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    status: str = Field(default=EventStatus.APPROVED.value, index=True)
    pinned: bool = False
    # One per delivery attempt; retries of the same occurrence carry different ids.
    github_delivery_id: Optional[str] = None
    # Derived occurrence key, stable across retries.
    github_event_id: Optional[str] = Field(default=None, index=True)

    def __repr__(self):
        return f"<Event(id={self.id}, type={self.type}, repo_id={self.repo_id}, title={self.title})>"
