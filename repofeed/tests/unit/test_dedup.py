from repofeed.integrations.github.webhook_payloads import parse_webhook_payload
from repofeed.tests.payloads import (
    issue_payload,
    pull_request_payload,
    push_payload,
    release_payload,
)
from repofeed.utils.dedup import derive_dedup_key


def _key(event_family, data):
    return derive_dedup_key(event_family, parse_webhook_payload(event_family, data))


def test_release_key_uses_release_id():
    assert _key("release", release_payload(release_id=77)) == "release-77"


def test_release_key_falls_back_to_tag():
    assert _key("release", release_payload(release_id=None)) == "release-tag-v1.2.0"


def test_release_without_identity_has_no_key():
    assert _key("release", release_payload(release_id=None, tag_name=None)) is None


def test_issue_key_includes_action():
    assert _key("issues", issue_payload(issue_id=555)) == "issue-555-opened"


def test_pull_request_key_includes_action():
    assert _key("pull_request", pull_request_payload(pr_id=9001)) == "pr-9001-closed"


def test_push_key_is_head_commit():
    assert _key("push", push_payload(after="deadbeef")) == "deadbeef"


def test_distinct_pushes_do_not_collide():
    assert _key("push", push_payload(after="aaa")) != _key("push", push_payload(after="bbb"))


def test_push_without_head_has_no_key():
    assert _key("push", push_payload(after=None)) is None
