"""
GitHub API service facade.

The event tools depend on this class only, which keeps the code-hosting
capability swappable (tests pass a fake with the same five coroutines).
"""

from app.services.github.read_operations import GitHubReadOperations
from app.services.github.types import (
    CodeSearchHit,
    GitHubRepo,
    PullRequestFile,
    RepoFile,
    RepoTree,
)


class GitHubService:
    """Service for interacting with GitHub REST API."""

    def __init__(self, token: str, max_file_size: int = 100_000):
        self.token = token
        self._reader = GitHubReadOperations(token, max_file_size=max_file_size)

    async def get_repo_tree(self, owner: str, repo: str, branch: str = "main") -> RepoTree:
        return await self._reader.get_repo_tree(owner, repo, branch)

    async def get_file_content(
        self, owner: str, repo: str, path: str, branch: str = "main"
    ) -> RepoFile | None:
        return await self._reader.get_file_content(owner, repo, path, branch)

    async def search_code(self, query: str, per_page: int = 100) -> list[CodeSearchHit]:
        return await self._reader.search_code(query, per_page=per_page)

    async def list_org_repos(self, org: str, per_page: int = 100) -> list[GitHubRepo]:
        return await self._reader.list_org_repos(org, per_page=per_page)

    async def list_pull_request_files(
        self, owner: str, repo: str, pull_number: int
    ) -> list[PullRequestFile]:
        return await self._reader.list_pull_request_files(owner, repo, pull_number)
