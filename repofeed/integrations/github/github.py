import requests
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from repofeed.utils.logger import logger


class GitHubApiClient:
    """Read-only GitHub REST client used to enrich stored events.

    Every call is a single bounded request: failures are logged and
    reported as None so callers can abandon the lookup.
    """

    def __init__(
        self,
        token: Optional[str],
        api_url: str = "https://api.github.com",
        timeout: float = 10,
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.token)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        url = f"{self.api_url}{path}"
        try:
            response = requests.get(
                url, headers=self._headers(), params=params, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            error_msg = f"GitHub API request to {path} failed: {e}"
            if hasattr(e, "response") and e.response is not None:
                error_msg += f" - Response: {e.response.text}"
            logger.warning(error_msg)
            return None
        except ValueError as e:
            logger.warning(f"GitHub API returned invalid JSON for {path}: {e}")
            return None

    def compare(self, owner: str, repo: str, base: str, head: str) -> Optional[Dict[str, Any]]:
        return self._get(f"/repos/{owner}/{repo}/compare/{base}...{head}")

    def get_commit(self, owner: str, repo: str, sha: str) -> Optional[Dict[str, Any]]:
        return self._get(f"/repos/{owner}/{repo}/commits/{sha}")

    def list_pull_commits(self, owner: str, repo: str, number: int) -> Optional[List[Dict[str, Any]]]:
        return self._get(
            f"/repos/{owner}/{repo}/pulls/{number}/commits", params={"per_page": 100}
        )

    def list_pull_files(self, owner: str, repo: str, number: int) -> Optional[List[Dict[str, Any]]]:
        return self._get(
            f"/repos/{owner}/{repo}/pulls/{number}/files", params={"per_page": 100}
        )

    def get_tag_ref(self, owner: str, repo: str, tag: str) -> Optional[Dict[str, Any]]:
        return self._get(f"/repos/{owner}/{repo}/git/ref/tags/{quote(tag, safe='/')}")

    def get_tag_object(self, owner: str, repo: str, sha: str) -> Optional[Dict[str, Any]]:
        return self._get(f"/repos/{owner}/{repo}/git/tags/{sha}")
