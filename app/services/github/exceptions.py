"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class RepositoryNotAccessibleError(GitHubAPIError):
    """No candidate branch of a repository resolved to a file tree.

    Raised by branch discovery after every candidate ref failed. The
    repository is usually private, empty, or outside the token's reach.
    """

    def __init__(self, full_name: str, branches_tried: list[str]):
        self.full_name = full_name
        self.branches_tried = branches_tried
        super().__init__(
            f"Repository {full_name} is not accessible on any branch "
            f"({', '.join(branches_tried)}). It might be private or you may lack permissions.",
            status_code=404,
        )
