from datetime import datetime, timezone

import pytest

from repofeed.core.exceptions import MalformedPayload
from repofeed.integrations.github.normalizer import normalize
from repofeed.integrations.github.webhook_payloads import parse_webhook_payload
from repofeed.models.event import EventStatus, EventType
from repofeed.tests.payloads import (
    issue_payload,
    pull_request_payload,
    push_payload,
    release_payload,
)


def _normalize(event_family, data, **kwargs):
    payload = parse_webhook_payload(event_family, data)
    return normalize(event_family, payload.action, payload, **kwargs)


class TestPush:
    def test_single_commit(self):
        event = _normalize("push", push_payload(messages=["fix: null check"]))

        assert event.type == EventType.COMMIT
        assert event.title == "fix: null check"
        assert event.summary == "fix: null check"
        assert "fix" in event.tags
        assert event.status == EventStatus.APPROVED
        assert event.pinned is False
        assert event.source_url.endswith("/compare/000111...abc123")

    def test_single_commit_title_is_first_line(self):
        event = _normalize(
            "push", push_payload(messages=["Add loader\n\nLonger explanation."])
        )

        assert event.title == "Add loader"
        assert event.summary == "Add loader\n\nLonger explanation."

    def test_multiple_commits(self):
        event = _normalize(
            "push",
            push_payload(
                messages=["feat: dark mode\n\ndetails", "docs: readme"],
                ref="refs/heads/release/2.x",
            ),
        )

        assert event.title == "2 new commits to release/2.x"
        assert event.summary == "• feat: dark mode\n• docs: readme"
        assert event.body == "feat: dark mode\n\ndetails\n\ndocs: readme"
        assert event.tags == ["feature", "docs"]

    def test_multi_commit_summary_is_truncated(self):
        messages = [f"commit number {i} " + "x" * 40 for i in range(30)]
        event = _normalize("push", push_payload(messages=messages))

        assert len(event.summary) == 500

    def test_timestamp_is_ingestion_time(self):
        before = datetime.now(timezone.utc)
        event = _normalize("push", push_payload())

        assert event.timestamp >= before

    def test_empty_commit_list_yields_nothing(self):
        data = push_payload(messages=[])
        data["after"] = "0000000000000000000000000000000000000000"

        assert _normalize("push", data) is None


class TestRelease:
    def test_release_is_pinned_and_tagged(self):
        event = _normalize("release", release_payload())

        assert event.type == EventType.RELEASE
        assert event.title == "Release v1.2.0: Spring"
        assert event.pinned is True
        assert event.tags == ["release", "feature"]
        assert event.timestamp == datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_release_without_name_uses_tag(self):
        event = _normalize("release", release_payload(name=None))

        assert event.title == "Release v1.2.0: v1.2.0"

    def test_release_without_body_uses_placeholder(self):
        event = _normalize("release", release_payload(body=None))

        assert event.summary == "New release published"
        assert event.body == ""
        assert event.tags == ["release"]

    def test_release_summary_truncated_to_300(self):
        event = _normalize("release", release_payload(body="y" * 1000))

        assert len(event.summary) == 300

    def test_release_tags_stay_within_three(self):
        event = _normalize(
            "release", release_payload(body="fix feature docs refactor")
        )

        assert event.tags == ["release", "fix", "feature"]


class TestPullRequest:
    def test_merged_pr(self):
        event = _normalize("pull_request", pull_request_payload(merged=True))

        assert event.type == EventType.PR_MERGE
        assert event.title == "PR #42: Refactor widget loader"
        assert event.pinned is False
        assert "refactor" in event.tags
        assert event.timestamp == datetime(2026, 3, 2, 8, 30, tzinfo=timezone.utc)

    def test_closed_without_merge_yields_nothing(self):
        assert _normalize("pull_request", pull_request_payload(merged=False)) is None

    @pytest.mark.parametrize("action", ["opened", "synchronize", "reopened"])
    def test_other_actions_yield_nothing(self, action):
        assert _normalize("pull_request", pull_request_payload(action=action)) is None

    def test_closed_without_merge_opt_in(self):
        event = _normalize(
            "pull_request",
            pull_request_payload(merged=False),
            include_closed_prs=True,
        )

        assert event.type == EventType.PR_CLOSED
        assert event.title == "PR #42: Refactor widget loader"

    def test_missing_merged_flag_never_becomes_closed(self):
        data = pull_request_payload(merged=False)
        del data["pull_request"]["merged"]

        assert _normalize("pull_request", data, include_closed_prs=True) is None


class TestIssues:
    def test_opened_issue(self):
        event = _normalize("issues", issue_payload())

        assert event.type == EventType.ISSUE
        assert event.title == "Issue #5: Crash on startup"
        assert event.tags == ["issue", "fix"]
        assert event.pinned is False

    def test_other_actions_yield_nothing(self):
        assert _normalize("issues", issue_payload(action="closed")) is None


def test_unknown_family_is_not_parsed():
    assert parse_webhook_payload("star", {"repository": {"full_name": "a/b"}}) is None


def test_missing_repository_block_is_malformed():
    data = push_payload()
    del data["repository"]

    with pytest.raises(MalformedPayload) as excinfo:
        parse_webhook_payload("push", data)

    assert "repository" in str(excinfo.value)
