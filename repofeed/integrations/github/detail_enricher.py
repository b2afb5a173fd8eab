"""
Detail enrichment for stored events.

The stored source URL decides what is fetched:

    /compare/<base>...<head>   compare range
    /pull/<number>             PR commits + PR files
    /releases/tag/<tag>        tag ref -> commit
    /commit/<sha>              single commit

Each branch is all-or-nothing: one failed call yields no detail at all.
"""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

from repofeed.integrations.github.github import GitHubApiClient
from repofeed.models.event import Event
from repofeed.models.event_detail import (
    CommitAuthor,
    CommitDetail,
    DetailStats,
    EventDetail,
    FileDetail,
)
from repofeed.utils.logger import logger

REPO_PATTERN = re.compile(r"github\.com/([^/]+)/([^/?#]+)")
COMPARE_PATTERN = re.compile(r"/compare/(.+?)\.\.\.([^/?#]+)")
PULL_PATTERN = re.compile(r"/pull/(\d+)")
RELEASE_TAG_PATTERN = re.compile(r"/releases/tag/([^?#]+)")
COMMIT_PATTERN = re.compile(r"/commit/([0-9a-fA-F]+)")


class DetailEnricher:
    def __init__(self, client: GitHubApiClient):
        self.client = client

    def enrich(self, event: Event) -> Optional[EventDetail]:
        """Fetch commit/file detail for an event. Never raises; failures yield None."""
        if not self.client.configured:
            logger.debug("GitHub token not configured, skipping enrichment.")
            return None

        url = event.source_url
        if not url:
            return None

        try:
            return self._enrich_url(url)
        except Exception as e:
            logger.warning(f"Enrichment of event {event.id} from {url} failed: {e}")
            return None

    def _enrich_url(self, url: str) -> Optional[EventDetail]:
        repo_match = REPO_PATTERN.search(url)
        if not repo_match:
            return None
        owner, repo = repo_match.groups()

        if "/compare/" in url:
            match = COMPARE_PATTERN.search(url)
            return self._compare_detail(owner, repo, *match.groups()) if match else None

        if "/pull/" in url:
            match = PULL_PATTERN.search(url)
            return self._pull_detail(owner, repo, int(match.group(1))) if match else None

        if "/releases/tag/" in url:
            match = RELEASE_TAG_PATTERN.search(url)
            if not match:
                return None
            return self._release_detail(owner, repo, unquote(match.group(1)))

        if "/commit/" in url:
            match = COMMIT_PATTERN.search(url)
            return self._commit_detail(owner, repo, match.group(1)) if match else None

        return None

    def _compare_detail(self, owner: str, repo: str, base: str, head: str) -> Optional[EventDetail]:
        data = self.client.compare(owner, repo, base, head)
        if data is None:
            return None

        commits = [_commit(c) for c in data.get("commits") or []]
        files = [_file(f) for f in data.get("files") or []]
        return _detail(commits, files)

    def _pull_detail(self, owner: str, repo: str, number: int) -> Optional[EventDetail]:
        raw_commits = self.client.list_pull_commits(owner, repo, number)
        if raw_commits is None:
            return None
        raw_files = self.client.list_pull_files(owner, repo, number)
        if raw_files is None:
            return None

        return _detail([_commit(c) for c in raw_commits], [_file(f) for f in raw_files])

    def _release_detail(self, owner: str, repo: str, tag: str) -> Optional[EventDetail]:
        ref = self.client.get_tag_ref(owner, repo, tag)
        if ref is None:
            return None

        target = ref.get("object") or {}
        sha = target.get("sha")
        if target.get("type") == "tag" and sha:
            # Annotated tag: the ref points at a tag object, not the commit.
            tag_object = self.client.get_tag_object(owner, repo, sha)
            if tag_object is None:
                return None
            sha = (tag_object.get("object") or {}).get("sha")

        if not sha:
            return None
        return self._commit_detail(owner, repo, sha)

    def _commit_detail(self, owner: str, repo: str, sha: str) -> Optional[EventDetail]:
        data = self.client.get_commit(owner, repo, sha)
        if data is None:
            return None

        files = [_file(f) for f in data.get("files") or []]
        stats = data.get("stats") or {}
        return EventDetail(
            commits=[_commit(data)],
            files=files,
            stats=DetailStats(
                total_commits=1,
                files_changed=len(files),
                additions=stats.get("additions", sum(f.additions for f in files)),
                deletions=stats.get("deletions", sum(f.deletions for f in files)),
            ),
        )


def _commit(data: Dict[str, Any]) -> CommitDetail:
    commit = data.get("commit") or {}
    author = commit.get("author") or {}
    return CommitDetail(
        sha=data["sha"],
        message=commit.get("message", ""),
        author=CommitAuthor(
            name=author.get("name"), email=author.get("email"), date=author.get("date")
        ),
        url=data.get("html_url"),
    )


def _file(data: Dict[str, Any]) -> FileDetail:
    return FileDetail(
        filename=data["filename"],
        status=data.get("status"),
        additions=data.get("additions", 0),
        deletions=data.get("deletions", 0),
        changes=data.get("changes", 0),
        patch=data.get("patch"),
    )


def _detail(commits: List[CommitDetail], files: List[FileDetail]) -> EventDetail:
    # Totals are summed over files; PR listings carry no aggregate stats.
    return EventDetail(
        commits=commits,
        files=files,
        stats=DetailStats(
            total_commits=len(commits),
            files_changed=len(files),
            additions=sum(f.additions for f in files),
            deletions=sum(f.deletions for f in files),
        ),
    )
