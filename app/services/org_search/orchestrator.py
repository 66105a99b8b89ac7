"""
Organization-wide search for a named analytics event.

Two phases:

1. Exact match: a GitHub code search for the quoted event name selects
   candidate repositories. Each one gets a targeted scan (branch discovery,
   path prioritization, rate-limited batches, early exit on first hit) and
   the confirmed occurrences go through cross-repo analysis.
2. Fallback: when the code search finds nothing, list the organization's
   likely repositories and return guidance for a broader search instead of
   scanning anything automatically.
"""

import asyncio
import logging
from typing import Any

import httpx

from app.config import settings
from app.services.events import extract_events
from app.services.events.types import EventCandidate, EventLocation
from app.services.file_filters import filter_paths
from app.services.github import (
    GitHubAPIError,
    GitHubRepo,
    GitHubService,
    RepositoryNotAccessibleError,
    RepoTree,
)
from app.services.org_search.cross_repo import RepositoryMatches, analyze_cross_repo_patterns
from app.services.org_search.prioritizer import (
    has_event_hint,
    prioritize_files,
    rank_repositories,
)
from app.services.org_search.tokens import extract_search_tokens
from app.services.rate_limiter import AsyncTokenBucket

logger = logging.getLogger(__name__)

SEARCH_EXTENSIONS = ("js", "ts", "jsx", "tsx")
FALLBACK_BRANCHES = ("main", "master", "develop", "development", "staging")
CODE_LANGUAGES = frozenset({"JavaScript", "TypeScript", "Vue", "React"})

TOKEN_SEARCH_REPO_LIMIT = 10
SCAN_SUGGESTION_LIMIT = 5
MANUAL_INSPECTION_LIMIT = 3


class SearchPhase:
    EXACT_MATCH_SUCCESS = "exact_match_success"
    EXACT_MATCH_FAILED = "exact_match_failed"


def build_exact_query(org: str, event_name: str) -> str:
    extensions = " OR ".join(f"extension:{ext}" for ext in SEARCH_EXTENSIONS)
    return f'"{event_name}" org:{org} {extensions}'


def candidate_branches(default_branch: str | None) -> list[str]:
    """The repository's own branch first, then common names, without repeats."""
    return list(dict.fromkeys([default_branch or "main", *FALLBACK_BRANCHES]))


def matches_target(name: str, target: str) -> bool:
    return name == target or target in name or name in target


def is_code_repository(repo: GitHubRepo) -> bool:
    return repo.language is None or repo.language in CODE_LANGUAGES or has_event_hint(repo)


def _qualify(event: EventCandidate, repository: str) -> EventCandidate:
    return EventCandidate(
        name=event.name,
        properties=event.properties,
        location=EventLocation(file=f"{repository}/{event.location.file}", line=event.location.line),
    )


class OrgEventSearchOrchestrator:
    """
    Locate one event across an organization's repositories.

    The rate limiter is awaited before every file batch of every repository,
    so one instance paces a whole search.
    """

    def __init__(
        self,
        github: GitHubService,
        rate_limiter: AsyncTokenBucket | None = None,
        batch_size: int | None = None,
        max_files: int | None = None,
        stop_on_first_match: bool | None = None,
    ):
        self.github = github
        self.rate_limiter = rate_limiter or AsyncTokenBucket.from_interval(
            settings.org_search_batch_delay_seconds
        )
        self.batch_size = batch_size or settings.org_search_batch_size
        self.max_files = max_files or settings.org_search_max_files
        self.stop_on_first_match = (
            settings.org_search_stop_on_first_match
            if stop_on_first_match is None
            else stop_on_first_match
        )

    # ─────────────────────────────────────────────────────────────
    # Entry point
    # ─────────────────────────────────────────────────────────────

    async def search(
        self,
        org: str,
        event_name: str,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
        max_repos: int | None = None,
    ) -> dict[str, Any]:
        """
        Search ``org`` for ``event_name``.

        Never raises for per-repository problems; those are reported in
        ``error_repositories``. A code search that fails counts as no hits.
        """
        include = include_patterns or settings.default_include_patterns
        exclude = exclude_patterns if exclude_patterns is not None else settings.default_exclude_patterns
        max_repos = max_repos or settings.default_max_repos

        logger.info(f'Searching {org} for event "{event_name}"')

        repos = await self.find_repositories_with_exact_match(org, event_name, max_repos)
        if not repos:
            logger.info(f'No exact matches for "{event_name}" in {org}, listing repositories')
            return await self._fallback(org, event_name, max_repos)

        logger.info(f"Found {len(repos)} repositories with an exact match")

        results: list[RepositoryMatches] = []
        processed: list[str] = []
        errors: list[dict[str, str]] = []

        for repo in repos:
            try:
                matches = await self.scan_repository_for_event(org, repo, event_name, include, exclude)
            except GitHubAPIError as e:
                logger.warning(f"Error scanning repository {org}/{repo.name}: {e.message}")
                errors.append({"repository": repo.name, "error": e.message})
                continue
            except Exception as e:
                logger.exception(f"Unexpected error scanning repository {org}/{repo.name}")
                errors.append({"repository": repo.name, "error": str(e)})
                continue

            processed.append(repo.name)
            if matches.events:
                results.append(matches)

        return {
            "search_query": {
                "organization": org,
                "event_name": event_name,
                "search_phase": SearchPhase.EXACT_MATCH_SUCCESS,
                "repositories_searched": len(processed),
                "repositories_with_event": len(results),
            },
            "cross_repo_summary": analyze_cross_repo_patterns(results, event_name),
            "repository_results": [r.to_dict() for r in results],
            "processed_repositories": processed,
            "error_repositories": errors,
        }

    # ─────────────────────────────────────────────────────────────
    # Phase 1: exact match
    # ─────────────────────────────────────────────────────────────

    async def find_repositories_with_exact_match(
        self, org: str, event_name: str, max_repos: int
    ) -> list[GitHubRepo]:
        """Distinct repositories containing the quoted event name, in search order."""
        query = build_exact_query(org, event_name)
        try:
            hits = await self.github.search_code(query, per_page=100)
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.warning(f"Exact search failed for {org}: {e}")
            return []

        repos: dict[str, GitHubRepo] = {}
        for hit in hits:
            repos.setdefault(hit.repository.name, hit.repository)

        logger.debug(f"Exact search found {len(repos)} repositories")
        return list(repos.values())[:max_repos]

    async def resolve_tree(self, owner: str, repo: GitHubRepo) -> tuple[str, RepoTree]:
        """
        Find the first candidate branch whose tree can be read.

        Raises:
            RepositoryNotAccessibleError: If no candidate branch resolves
        """
        branches = candidate_branches(repo.default_branch)
        for branch in branches:
            try:
                tree = await self.github.get_repo_tree(owner, repo.name, branch)
            except (GitHubAPIError, httpx.HTTPError) as e:
                logger.debug(f"Branch '{branch}' failed for {owner}/{repo.name}: {e}")
                continue
            logger.debug(f"Resolved {owner}/{repo.name} on branch {branch}")
            return branch, tree

        raise RepositoryNotAccessibleError(f"{owner}/{repo.name}", branches)

    async def _matches_in_file(
        self, owner: str, repo: str, path: str, branch: str, event_name: str
    ) -> list[EventCandidate]:
        file = await self.github.get_file_content(owner, repo, path, branch)
        if file is None or event_name not in file.content:
            return []

        matched = [
            _qualify(event, repo)
            for event in extract_events(file.content, path)
            if matches_target(event.name, event_name)
        ]
        if matched:
            logger.debug(f"Found {len(matched)} matching events in {repo}/{path}")
        return matched

    async def scan_repository_for_event(
        self,
        owner: str,
        repo: GitHubRepo,
        event_name: str,
        include_patterns: list[str],
        exclude_patterns: list[str],
    ) -> RepositoryMatches:
        """
        Targeted scan of one repository for ``event_name``.

        Only the top prioritized files are fetched, and with early exit
        enabled scanning stops after the first batch that yields a match.
        """
        branch, tree = await self.resolve_tree(owner, repo)

        paths = filter_paths(tree.files, include_patterns, exclude_patterns)
        to_scan = prioritize_files(paths, event_name, self.max_files)
        logger.info(
            f"Scanning top {len(to_scan)} of {len(paths)} relevant files in {owner}/{repo.name}@{branch}"
        )

        result = RepositoryMatches(
            repository=repo.name,
            events=[],
            branch=branch,
            default_branch=repo.default_branch,
            repo_url=repo.url,
            last_updated=repo.updated_at,
            search_strategy="exact",
        )

        for start in range(0, len(to_scan), self.batch_size):
            batch = to_scan[start : start + self.batch_size]
            await self.rate_limiter.acquire()

            outcomes = await asyncio.gather(
                *(
                    self._matches_in_file(owner, repo.name, path, branch, event_name)
                    for path in batch
                ),
                return_exceptions=True,
            )
            result.files_scanned += len(batch)

            found = 0
            for path, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    logger.warning(f"Error processing file {owner}/{repo.name}:{path}: {outcome}")
                    continue
                result.events.extend(outcome)
                found += len(outcome)

            if found and self.stop_on_first_match:
                logger.info(f"Found {found} target events in {repo.name}, stopping early")
                break

        return result

    # ─────────────────────────────────────────────────────────────
    # Phase 2: fallback guidance
    # ─────────────────────────────────────────────────────────────

    async def list_available_repositories(self, org: str, max_repos: int) -> list[GitHubRepo]:
        """Organization repositories likely to hold frontend code. Empty on failure."""
        try:
            repos = await self.github.list_org_repos(org, per_page=min(max_repos, 100))
        except (GitHubAPIError, httpx.HTTPError) as e:
            logger.warning(f"Failed to list repositories for {org}: {e}")
            return []

        code_repos = [r for r in repos if is_code_repository(r)]
        logger.info(f"Found {len(code_repos)} potentially relevant repositories in {org}")
        return code_repos

    def build_next_steps(self, event_name: str, repos: list[GitHubRepo]) -> dict[str, Any]:
        tokens = extract_search_tokens(event_name)
        scan_candidates = [
            r.name
            for r in repos
            if has_event_hint(r) or r.language in ("TypeScript", "JavaScript")
        ]
        recent = sorted(
            (r for r in repos if not r.archived),
            key=lambda r: r.updated_at or "",
            reverse=True,
        )

        return {
            "message": "Would you like to proceed with a broader search?",
            "options": [
                {
                    "action": "token_search",
                    "description": "Search for individual keywords from the event name",
                    "estimated_api_calls": f"~{min(TOKEN_SEARCH_REPO_LIMIT, len(repos))} calls",
                    "keywords_to_search": tokens,
                    "suggested_repos": [
                        r.name for r in rank_repositories(repos, tokens)[:TOKEN_SEARCH_REPO_LIMIT]
                    ],
                },
                {
                    "action": "scan_specific_repos",
                    "description": "Scan specific repositories for all events",
                    "estimated_api_calls": "1 call per repository",
                    "suggested_repos": scan_candidates[:SCAN_SUGGESTION_LIMIT],
                },
                {
                    "action": "manual_inspection",
                    "description": "Manually inspect the most likely repositories",
                    "suggested_repos": [
                        {"name": r.name, "reason": "Most recently updated"}
                        for r in recent[:MANUAL_INSPECTION_LIMIT]
                    ],
                },
            ],
        }

    async def _fallback(self, org: str, event_name: str, max_repos: int) -> dict[str, Any]:
        repos = await self.list_available_repositories(org, max_repos)

        return {
            "search_query": {
                "organization": org,
                "event_name": event_name,
                "search_phase": SearchPhase.EXACT_MATCH_FAILED,
                "repositories_searched": 0,
                "repositories_with_event": 0,
            },
            "exact_match_result": {
                "found": False,
                "message": f'No repositories found containing the exact event: "{event_name}"',
            },
            "available_repositories": {
                "total_found": len(repos),
                "repositories": [
                    {
                        "name": r.name,
                        "language": r.language,
                        "description": r.description,
                        "last_updated": r.updated_at,
                        "url": r.url,
                        "is_archived": r.archived,
                        "default_branch": r.default_branch,
                    }
                    for r in repos
                ],
            },
            "next_steps": self.build_next_steps(event_name, repos),
        }
