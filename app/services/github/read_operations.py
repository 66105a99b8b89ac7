"""
GitHub API read operations.

Everything the event tools need from GitHub:
- Recursive file trees (cached)
- Decoded file contents
- Code search across an organization
- Organization repository listings
- Pull request file listings
"""

import base64
import logging
from typing import Any

from app.services.github.cache import cached_github_call, tree_cache
from app.services.github.helpers import handle_error_response
from app.services.github.http_client import get_github_client
from app.services.github.types import (
    CodeSearchHit,
    GitHubRepo,
    PullRequestFile,
    RepoFile,
    RepoTree,
    RepoTreeItem,
)

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Uses a shared HTTP client singleton for connection pooling; only the
    Authorization header is per instance.
    """

    def __init__(self, token: str, max_file_size: int = 100_000):
        self.token = token
        self.max_file_size = max_file_size
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}

    def _normalize_repo(self, data: dict[str, Any]) -> GitHubRepo:
        """Convert a GitHub repository payload to a GitHubRepo dataclass."""
        return GitHubRepo(
            name=data["name"],
            full_name=data.get("full_name", data["name"]),
            url=data.get("html_url", ""),
            default_branch=data.get("default_branch"),
            description=data.get("description"),
            language=data.get("language"),
            is_private=data.get("private", False),
            archived=data.get("archived", False),
            updated_at=data.get("updated_at"),
        )

    @cached_github_call(tree_cache)
    async def get_repo_tree(
        self,
        owner: str,
        repo: str,
        branch: str = "main",
    ) -> RepoTree:
        """
        Fetch the complete file tree for a repository.

        Uses the Git Trees API with recursive=1 to get all files in a single call.

        Args:
            owner: Repository owner (username or org)
            repo: Repository name
            branch: Branch name, tag or commit SHA

        Returns:
            RepoTree with file paths, directory paths, and truncation status
        """
        client = get_github_client()
        response = await client.get(
            f"/repos/{owner}/{repo}/git/trees/{branch}",
            headers=self._headers,
            params={"recursive": "1"},
        )

        handle_error_response(response, f"{owner}/{repo}@{branch}")

        data = response.json()

        files: list[str] = []
        directories: list[str] = []
        all_items: list[RepoTreeItem] = []

        for item in data.get("tree", []):
            tree_item = RepoTreeItem(
                path=item["path"],
                type=item["type"],
                size=item.get("size"),
                sha=item["sha"],
            )
            all_items.append(tree_item)

            if item["type"] == "blob":
                files.append(item["path"])
            elif item["type"] == "tree":
                directories.append(item["path"])

        if data.get("truncated"):
            logger.warning(f"Tree for {owner}/{repo}@{branch} was truncated by GitHub")

        return RepoTree(
            sha=data["sha"],
            files=files,
            directories=directories,
            all_items=all_items,
            truncated=data.get("truncated", False),
        )

    async def get_file_content(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: str = "main",
    ) -> RepoFile | None:
        """
        Fetch the content of a specific file from a repository.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path within the repository
            branch: Branch name or any ref (e.g. "refs/pull/12/head")

        Returns:
            RepoFile with decoded content, or None if the path is missing, a
            directory, too large, or not UTF-8 text
        """
        client = get_github_client()
        response = await client.get(
            f"/repos/{owner}/{repo}/contents/{path}",
            headers=self._headers,
            params={"ref": branch},
        )

        if response.status_code == 404:
            return None

        handle_error_response(response, f"{owner}/{repo}:{path}")

        data = response.json()

        # Directories come back as a list
        if not isinstance(data, dict) or data.get("type") != "file":
            return None

        size = data.get("size", 0)
        if size > self.max_file_size:
            logger.debug(f"Skipping {path}: {size} bytes exceeds {self.max_file_size}")
            return None

        content_b64 = data.get("content")
        if not content_b64:
            return None

        try:
            content = base64.b64decode(content_b64).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            return None

        return RepoFile(
            path=path,
            content=content,
            size=size,
            sha=data["sha"],
            encoding=data.get("encoding", "base64"),
        )

    async def search_code(self, query: str, per_page: int = 100) -> list[CodeSearchHit]:
        """
        Run a GitHub code search.

        Args:
            query: Search query, e.g. '"Signed Up" org:acme extension:ts'
            per_page: Results per page (max 100)

        Returns:
            Matching files with their (trimmed) repository objects
        """
        client = get_github_client()
        response = await client.get(
            "/search/code",
            headers=self._headers,
            params={"q": query, "per_page": min(per_page, 100)},
        )

        handle_error_response(response, f"search:{query}")

        data = response.json()
        return [
            CodeSearchHit(
                path=item.get("path", ""),
                repository=self._normalize_repo(item["repository"]),
            )
            for item in data.get("items", [])
            if item.get("repository")
        ]

    async def list_org_repos(self, org: str, per_page: int = 100) -> list[GitHubRepo]:
        """
        List repositories of an organization (first page only).

        Args:
            org: Organization login
            per_page: Items per page (max 100)

        Returns:
            Normalized repositories, in GitHub's default order
        """
        client = get_github_client()
        response = await client.get(
            f"/orgs/{org}/repos",
            headers=self._headers,
            params={"type": "all", "per_page": min(per_page, 100)},
        )

        handle_error_response(response, f"org:{org}")

        return [self._normalize_repo(r) for r in response.json()]

    async def list_pull_request_files(
        self,
        owner: str,
        repo: str,
        pull_number: int,
    ) -> list[PullRequestFile]:
        """
        List files changed by a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pull_number: Pull request number

        Returns:
            Changed files with their status and line counts
        """
        client = get_github_client()
        response = await client.get(
            f"/repos/{owner}/{repo}/pulls/{pull_number}/files",
            headers=self._headers,
            params={"per_page": 100},
        )

        handle_error_response(response, f"{owner}/{repo}#{pull_number}")

        return [
            PullRequestFile(
                filename=f.get("filename", ""),
                status=f.get("status", "modified"),
                additions=f.get("additions", 0),
                deletions=f.get("deletions", 0),
            )
            for f in response.json()
        ]
