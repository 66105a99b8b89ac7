"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass
class GitHubRepo:
    """Normalized GitHub repository data.

    Code search results embed a trimmed repository object, so everything past
    the name is optional and falls back to GitHub's own defaults.
    """

    name: str
    full_name: str
    url: str
    default_branch: str | None = None
    description: str | None = None
    language: str | None = None
    is_private: bool = False
    archived: bool = False
    updated_at: str | None = None


@dataclass
class RepoTreeItem:
    """Single item in a repository tree."""

    path: str
    type: str  # "blob" (file) or "tree" (directory)
    size: int | None  # Size in bytes (only for blobs)
    sha: str


@dataclass
class RepoTree:
    """Repository file tree structure."""

    sha: str
    files: list[str]  # List of file paths (blobs only)
    directories: list[str]  # List of directory paths
    all_items: list[RepoTreeItem]  # Full tree data
    truncated: bool  # True if tree was too large and truncated


@dataclass
class RepoFile:
    """Contents of a single file from a repository."""

    path: str
    content: str  # Decoded text content
    size: int
    sha: str
    encoding: str  # Original encoding (usually "base64")


@dataclass
class CodeSearchHit:
    """A single code search result: the matching file and its repository."""

    path: str
    repository: GitHubRepo


@dataclass
class PullRequestFile:
    """A file changed by a pull request."""

    filename: str
    status: str  # "added", "modified", "removed", "renamed", ...
    additions: int = 0
    deletions: int = 0
