"""
Repository scanner.

Walks one repository at one ref, fetches matching files in bounded batches,
and runs the extraction engine over each of them. A failure on one file is
recorded and never aborts the scan; a failure to read the tree does.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from app.config import settings
from app.services.events import analyze_events, extract_events, generate_event_summary
from app.services.events.types import EventCandidate, EventQualityReport
from app.services.file_filters import filter_paths
from app.services.github import GitHubService

logger = logging.getLogger(__name__)


@dataclass
class FileScanOutcome:
    """Result of fetching and extracting a single file."""

    path: str
    events: list[EventCandidate] = field(default_factory=list)
    skipped: bool = False
    error: str | None = None


@dataclass
class RepoScanResult:
    """Everything found in one repository at one ref."""

    owner: str
    repo: str
    ref: str
    events: list[EventCandidate] = field(default_factory=list)
    processed_files: list[str] = field(default_factory=list)
    error_files: list[str] = field(default_factory=list)
    summary: dict[str, Any] = field(default_factory=dict)
    analysis: EventQualityReport = field(default_factory=EventQualityReport)

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository": f"{self.owner}/{self.repo}",
            "ref": self.ref,
            "scan_results": {
                "total_files_scanned": len(self.processed_files),
                "total_events_found": len(self.events),
                "unique_event_names": len({e.name for e in self.events}),
                "files_with_errors": len(self.error_files),
            },
            "event_summary": self.summary,
            "all_events": [e.to_dict() for e in self.events],
            "analysis": self.analysis.to_dict(),
            "processed_files": self.processed_files,
            "error_files": self.error_files,
        }


async def fetch_and_extract(
    github: GitHubService, owner: str, repo: str, path: str, ref: str
) -> FileScanOutcome:
    """Fetch one file and extract its events, capturing any failure in the outcome."""
    try:
        file = await github.get_file_content(owner, repo, path, ref)
        if file is None:
            return FileScanOutcome(path=path, skipped=True)
        return FileScanOutcome(path=path, events=extract_events(file.content, path))
    except Exception as e:
        logger.warning(f"Error processing file {owner}/{repo}:{path}: {e}")
        return FileScanOutcome(path=path, error=str(e))


class RepositoryScanner:
    """Scan a single repository for analytics events."""

    def __init__(self, github: GitHubService, batch_size: int | None = None):
        self.github = github
        self.batch_size = batch_size or settings.scan_batch_size

    async def scan(
        self,
        owner: str,
        repo: str,
        ref: str = "main",
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> RepoScanResult:
        """
        Scan every matching file of ``owner/repo`` at ``ref``.

        Raises:
            GitHubAPIError: If the tree itself cannot be read
        """
        include = include_patterns or settings.default_include_patterns
        exclude = exclude_patterns if exclude_patterns is not None else settings.default_exclude_patterns

        logger.info(f"Starting repository scan for {owner}/{repo}@{ref}")
        tree = await self.github.get_repo_tree(owner, repo, ref)
        paths = filter_paths(tree.files, include, exclude)
        logger.info(f"Filtered {len(tree.files)} files to {len(paths)} relevant files")

        result = RepoScanResult(owner=owner, repo=repo, ref=ref)
        total_batches = (len(paths) + self.batch_size - 1) // self.batch_size

        for batch_index, start in enumerate(range(0, len(paths), self.batch_size), start=1):
            batch = paths[start : start + self.batch_size]
            logger.debug(f"Processing batch {batch_index}/{total_batches}")

            outcomes = await asyncio.gather(
                *(fetch_and_extract(self.github, owner, repo, path, ref) for path in batch),
                return_exceptions=True,
            )

            for path, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    logger.warning(f"Error processing file {owner}/{repo}:{path}: {outcome}")
                    result.error_files.append(path)
                    continue
                if outcome.error is not None:
                    result.error_files.append(path)
                    continue
                if outcome.skipped:
                    continue
                result.processed_files.append(path)
                result.events.extend(outcome.events)
                if outcome.events:
                    logger.debug(f"Found {len(outcome.events)} events in {path}")

        result.summary = generate_event_summary(result.events)
        result.analysis = analyze_events(result.events)

        logger.info(
            f"Scan complete for {owner}/{repo}: {len(result.events)} events "
            f"in {len(result.processed_files)} files"
        )
        return result
