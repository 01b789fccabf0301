"""
GitHub REST API client for the deploy gate.

Read calls raise httpx.HTTPStatusError on a non-success status, which aborts the
run. The merge call is the exception: any merge that does not go through is
reported as False so the caller can fall back.
"""

import asyncio
import base64
from typing import Any, Dict, List, Optional

import httpx

from app.core.logging import get_logger
from app.models.pull_request import PullRequestHistory

logger = get_logger(__name__)


class GitHubClient:
    """Client for interacting with GitHub REST API."""

    def __init__(self, token: Optional[str] = None, base_url: str = "https://api.github.com"):
        """
        Initialize GitHub client.

        Args:
            token: GitHub Personal Access Token or Actions token
            base_url: API root, overridable for GitHub Enterprise
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "Dependabot-Deploy-Gate/1.0",
        }
        if token:
            self.headers["Authorization"] = f"token {token}"

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self.base_url}/repos/{owner}/{repo}"

    async def list_open_pull_requests(
        self, owner: str, repo: str, base: str
    ) -> List[Dict[str, Any]]:
        """
        List open pull requests targeting `base`, most recently updated first.

        Follows the `Link: rel="next"` header until every page is read.

        Args:
            owner: Repository owner (e.g., "octocat")
            repo: Repository name (e.g., "Hello-World")
            base: Base branch name

        Returns:
            List of PR objects as returned by GitHub.
        """
        url = f"{self._repo_url(owner, repo)}/pulls"
        params: Optional[Dict[str, Any]] = {
            "state": "open",
            "base": base,
            "sort": "updated",
            "direction": "desc",
            "per_page": 100,
        }

        pull_requests: List[Dict[str, Any]] = []

        async with httpx.AsyncClient() as client:
            next_url: Optional[str] = url
            while next_url:
                response = await client.get(next_url, headers=self.headers, params=params)
                response.raise_for_status()
                pull_requests.extend(response.json())
                next_url = response.links.get("next", {}).get("url")
                # the next link already carries the query string
                params = None

        return pull_requests

    async def fetch_pr_history(
        self, owner: str, repo: str, pr_number: int
    ) -> PullRequestHistory:
        """
        Fetch commits, review comments and reviews of a PR in parallel.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            PullRequestHistory with the three lists.
        """
        pr_url = f"{self._repo_url(owner, repo)}/pulls/{pr_number}"
        params = {"per_page": 100}

        async with httpx.AsyncClient() as client:
            commits_response, comments_response, reviews_response = await asyncio.gather(
                client.get(f"{pr_url}/commits", headers=self.headers, params=params),
                client.get(f"{pr_url}/comments", headers=self.headers, params=params),
                client.get(f"{pr_url}/reviews", headers=self.headers, params=params),
            )

            commits_response.raise_for_status()
            comments_response.raise_for_status()
            reviews_response.raise_for_status()

        return PullRequestHistory(
            commits=commits_response.json(),
            comments=comments_response.json(),
            reviews=reviews_response.json(),
        )

    async def approve_pull_request(
        self, owner: str, repo: str, pr_number: int
    ) -> Dict[str, Any]:
        """Submit an approving review on a PR."""
        url = f"{self._repo_url(owner, repo)}/pulls/{pr_number}/reviews"

        async with httpx.AsyncClient() as client:
            response = await client.post(
                url, headers=self.headers, json={"event": "APPROVE"}
            )
            response.raise_for_status()
            return response.json()

    async def merge_pull_request(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        sha: Optional[str] = None,
        merge_method: str = "merge",
    ) -> bool:
        """
        Merge a PR into its base branch.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            sha: Expected head SHA; GitHub refuses the merge if the head moved
            merge_method: merge, squash or rebase

        Returns:
            True if GitHub reports the PR as merged, False if the merge
            request fails for any reason.
        """
        url = f"{self._repo_url(owner, repo)}/pulls/{pr_number}/merge"
        body: Dict[str, Any] = {"merge_method": merge_method}
        if sha:
            body["sha"] = sha

        try:
            async with httpx.AsyncClient() as client:
                response = await client.put(url, headers=self.headers, json=body)
        except httpx.HTTPError as e:
            logger.warning("Merge of PR %s failed: %s", pr_number, e)
            return False

        if not response.is_success:
            logger.warning(
                "Merge of PR %s refused (%s): %s",
                pr_number,
                response.status_code,
                response.text,
            )
            return False
        return bool(response.json().get("merged", False))

    async def create_deployment(
        self,
        owner: str,
        repo: str,
        ref: str,
        environment: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Trigger a deploy by creating a GitHub deployment for `ref`.

        Returns:
            The created deployment object.
        """
        url = f"{self._repo_url(owner, repo)}/deployments"
        body = {
            "ref": ref,
            "environment": environment,
            "auto_merge": False,
            "required_contexts": [],
            "payload": payload or {},
        }

        async with httpx.AsyncClient() as client:
            response = await client.post(url, headers=self.headers, json=body)
            response.raise_for_status()
            return response.json()

    async def get_file_contents(
        self, owner: str, repo: str, path: str, ref: str
    ) -> Optional[str]:
        """
        Read a text file from the repository.

        Returns:
            Decoded file content, or None if the file does not exist at `ref`.
        """
        url = f"{self._repo_url(owner, repo)}/contents/{path}"

        async with httpx.AsyncClient() as client:
            response = await client.get(url, headers=self.headers, params={"ref": ref})

        if response.status_code == 404:
            return None
        response.raise_for_status()
        data = response.json()
        return base64.b64decode(data.get("content", "")).decode("utf-8")
