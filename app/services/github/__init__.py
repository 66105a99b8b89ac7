"""
GitHub service package.

Usage: `from app.services.github import GitHubService, GitHubAPIError`

Module structure:
- service.py: Main GitHubService facade
- read_operations.py: All read-only API operations
- helpers.py: Rate limit handling and error utilities
- types.py: Data types and response models
- exceptions.py: Custom exceptions
- cache.py: TTL cache for repository trees
- http_client.py: Shared pooled AsyncClient
"""

from app.services.github.cache import clear_all_caches as clear_github_caches
from app.services.github.cache import get_cache_stats as get_github_cache_stats
from app.services.github.exceptions import GitHubAPIError, RepositoryNotAccessibleError
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import close_github_client
from app.services.github.read_operations import GitHubReadOperations
from app.services.github.service import GitHubService
from app.services.github.types import (
    CodeSearchHit,
    GitHubRepo,
    PullRequestFile,
    RepoFile,
    RepoTree,
    RepoTreeItem,
)

__all__ = [
    # Service (main entry point)
    "GitHubService",
    "GitHubReadOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Cache management
    "clear_github_caches",
    "get_github_cache_stats",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "RepositoryNotAccessibleError",
    # Types
    "CodeSearchHit",
    "GitHubRepo",
    "PullRequestFile",
    "RepoFile",
    "RepoTree",
    "RepoTreeItem",
]
