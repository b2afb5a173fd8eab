"""
GitHub event normalizer.

Maps the four supported webhook families onto a NormalizedEvent. Anything
else, including actions of a supported family that are not tracked,
normalizes to None.
"""

from datetime import datetime, timezone
from typing import List, Optional

from repofeed.integrations.github.webhook_payloads import (
    IssuesPayload,
    PullRequestPayload,
    PushPayload,
    ReleasePayload,
    WebhookPayload,
)
from repofeed.models.event import EventType
from repofeed.models.normalized_event import NormalizedEvent
from repofeed.utils.tag_extractor import MAX_TAGS, extract_tags

PUSH_SUMMARY_LIMIT = 500
SUMMARY_LIMIT = 300
BRANCH_PREFIX = "refs/heads/"


def normalize(
    event_family: str,
    action: Optional[str],
    payload: WebhookPayload,
    include_closed_prs: bool = False,
) -> Optional[NormalizedEvent]:
    if event_family == "push" and isinstance(payload, PushPayload):
        return normalize_push(payload)

    if event_family == "release" and isinstance(payload, ReleasePayload):
        return normalize_release(payload)

    if event_family == "pull_request" and isinstance(payload, PullRequestPayload):
        if action != "closed":
            return None
        if payload.pull_request.merged is True:
            return normalize_pr_merge(payload)
        # Only an explicit merged=false identifies a close without merge.
        if include_closed_prs and payload.pull_request.merged is False:
            return normalize_pr_closed(payload)
        return None

    if event_family == "issues" and isinstance(payload, IssuesPayload):
        if action == "opened":
            return normalize_issue(payload)
        return None

    return None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _first_line(message: str) -> str:
    return message.split("\n")[0]


def _excerpt(body: Optional[str], fallback: str) -> str:
    return body[:SUMMARY_LIMIT] if body else fallback


def _prefixed_tags(prefix: str, text: str) -> List[str]:
    tags = [prefix] + [tag for tag in extract_tags(text) if tag != prefix]
    return tags[:MAX_TAGS]


def normalize_push(payload: PushPayload) -> Optional[NormalizedEvent]:
    commits = payload.commits
    # Branch deletions and tag-only pushes carry no commits.
    if not commits:
        return None

    branch = payload.ref
    if branch.startswith(BRANCH_PREFIX):
        branch = branch[len(BRANCH_PREFIX):]

    messages = [commit.message for commit in commits]
    if len(commits) == 1:
        title = _first_line(messages[0])
        summary = messages[0]
    else:
        title = f"{len(commits)} new commits to {branch}"
        summary = "\n".join(f"• {_first_line(m)}" for m in messages)[
            :PUSH_SUMMARY_LIMIT
        ]

    return NormalizedEvent(
        type=EventType.COMMIT,
        title=title,
        summary=summary,
        body="\n\n".join(messages),
        # Push payloads carry no single occurrence time.
        timestamp=_now(),
        source_url=payload.compare,
        tags=extract_tags(" ".join(messages)),
        pinned=False,
    )


def normalize_release(payload: ReleasePayload) -> NormalizedEvent:
    release = payload.release
    tag_name = release.tag_name or ""
    body = release.body or ""

    return NormalizedEvent(
        type=EventType.RELEASE,
        title=f"Release {tag_name}: {release.name or tag_name}",
        summary=_excerpt(body, "New release published"),
        body=body,
        timestamp=release.published_at or _now(),
        source_url=release.html_url,
        tags=_prefixed_tags("release", body),
        pinned=True,
    )


def normalize_pr_merge(payload: PullRequestPayload) -> NormalizedEvent:
    pr = payload.pull_request
    body = pr.body or ""

    return NormalizedEvent(
        type=EventType.PR_MERGE,
        title=f"PR #{pr.number}: {pr.title}",
        summary=_excerpt(body, "Pull request merged"),
        body=body,
        timestamp=pr.merged_at or _now(),
        source_url=pr.html_url,
        tags=extract_tags(f"{pr.title} {body}"),
        pinned=False,
    )


def normalize_pr_closed(payload: PullRequestPayload) -> NormalizedEvent:
    pr = payload.pull_request
    body = pr.body or ""

    return NormalizedEvent(
        type=EventType.PR_CLOSED,
        title=f"PR #{pr.number}: {pr.title}",
        summary=_excerpt(body, "Pull request closed without merging"),
        body=body,
        timestamp=pr.closed_at or _now(),
        source_url=pr.html_url,
        tags=extract_tags(f"{pr.title} {body}"),
        pinned=False,
    )


def normalize_issue(payload: IssuesPayload) -> NormalizedEvent:
    issue = payload.issue
    body = issue.body or ""

    return NormalizedEvent(
        type=EventType.ISSUE,
        title=f"Issue #{issue.number}: {issue.title}",
        summary=_excerpt(body, "New issue opened"),
        body=body,
        timestamp=issue.created_at or _now(),
        source_url=issue.html_url,
        tags=_prefixed_tags("issue", f"{issue.title} {body}"),
        pinned=False,
    )
