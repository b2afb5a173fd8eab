from typing import Optional

from repofeed.integrations.github.webhook_payloads import (
    IssuesPayload,
    PullRequestPayload,
    PushPayload,
    ReleasePayload,
    WebhookPayload,
)


def derive_dedup_key(event_family: str, payload: WebhookPayload) -> Optional[str]:
    """
    Build the occurrence key stored as Event.github_event_id.

    Retries of the same occurrence produce the same key; None means no
    identity material is available and the delivery is not deduplicated.
    """
    if event_family == "release" and isinstance(payload, ReleasePayload):
        release = payload.release
        if release.id is not None:
            return f"release-{release.id}"
        if release.tag_name:
            return f"release-tag-{release.tag_name}"
        return None

    if event_family == "issues" and isinstance(payload, IssuesPayload):
        if payload.issue.id is None:
            return None
        return f"issue-{payload.issue.id}-{payload.action}"

    if event_family == "pull_request" and isinstance(payload, PullRequestPayload):
        if payload.pull_request.id is None:
            return None
        return f"pr-{payload.pull_request.id}-{payload.action}"

    if event_family == "push" and isinstance(payload, PushPayload):
        return payload.after or None

    return None
