"""
Typed GitHub webhook payloads.

Each supported event family gets its own model; the raw JSON dictionary
stops here and only these models travel further into ingestion.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from repofeed.core.exceptions import MalformedPayload


class GitHubModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class RepositoryOwner(GitHubModel):
    login: Optional[str] = None
    avatar_url: Optional[str] = None


class RepositoryBlock(GitHubModel):
    full_name: str
    html_url: Optional[str] = None
    owner: Optional[RepositoryOwner] = None

    @property
    def icon_url(self) -> Optional[str]:
        return self.owner.avatar_url if self.owner else None


class WebhookPayload(GitHubModel):
    action: Optional[str] = None
    repository: RepositoryBlock


class PushCommit(GitHubModel):
    id: Optional[str] = None
    message: str = ""
    url: Optional[str] = None


class PushPayload(WebhookPayload):
    ref: str = ""
    after: Optional[str] = None
    compare: Optional[str] = None
    commits: List[PushCommit] = Field(default_factory=list)


class Release(GitHubModel):
    id: Optional[int] = None
    tag_name: Optional[str] = None
    name: Optional[str] = None
    body: Optional[str] = None
    html_url: Optional[str] = None
    published_at: Optional[datetime] = None


class ReleasePayload(WebhookPayload):
    release: Release


class PullRequest(GitHubModel):
    id: Optional[int] = None
    number: int
    title: str = ""
    body: Optional[str] = None
    html_url: Optional[str] = None
    merged: Optional[bool] = None
    merged_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


class PullRequestPayload(WebhookPayload):
    pull_request: PullRequest


class Issue(GitHubModel):
    id: Optional[int] = None
    number: int
    title: str = ""
    body: Optional[str] = None
    html_url: Optional[str] = None
    created_at: Optional[datetime] = None


class IssuesPayload(WebhookPayload):
    issue: Issue


PAYLOAD_MODELS: Dict[str, Type[WebhookPayload]] = {
    "push": PushPayload,
    "release": ReleasePayload,
    "pull_request": PullRequestPayload,
    "issues": IssuesPayload,
}


def parse_webhook_payload(
    event_family: str, data: Dict[str, Any]
) -> Optional[WebhookPayload]:
    """
    Validate a decoded webhook body against the model for its event family.

    Returns None for families this service does not ingest.

    Raises:
        MalformedPayload: If the body does not match the family's shape.
    """
    model = PAYLOAD_MODELS.get(event_family)
    if model is None:
        return None

    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(loc) for loc in error["loc"]) or "general"
            for error in e.errors()
        )
        raise MalformedPayload(
            f"Invalid {event_family} payload (fields: {fields})"
        ) from e
