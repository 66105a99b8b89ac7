# Services package

from app.services.event_tools import EventToolService, ToolResult
from app.services.org_search import OrgEventSearchOrchestrator
from app.services.rate_limiter import AsyncTokenBucket
from app.services.repo_scanner import RepositoryScanner, RepoScanResult

__all__ = [
    # Operation boundary
    "EventToolService",
    "ToolResult",
    # Scanning and search
    "RepositoryScanner",
    "RepoScanResult",
    "OrgEventSearchOrchestrator",
    "AsyncTokenBucket",
]
