"""Ordering heuristics for the org search: which files and repos to look at first."""

import re

from app.services.github import GitHubRepo

_WORD_SPLIT = re.compile(r"[\s\-_.]+")

EVENT_WORD_WEIGHT = 10
DIALOG_WEIGHT = 8
ANALYTICS_WEIGHT = 5
TEST_PENALTY = 3

REPO_NAME_HINTS = ("analytics", "tracking", "event")
SCRIPT_LANGUAGES = frozenset({"TypeScript", "JavaScript"})


def event_words(event_name: str) -> list[str]:
    return [w for w in _WORD_SPLIT.split(event_name.lower()) if len(w) > 2]


def score_path(path: str, words: list[str]) -> int:
    """Score how likely a file path is to contain an event with these words."""
    lower = path.lower()
    score = sum(EVENT_WORD_WEIGHT for word in words if word in lower)

    if "dialog" in lower or "modal" in lower:
        score += DIALOG_WEIGHT
    if "analytic" in lower or "track" in lower or "event" in lower:
        score += ANALYTICS_WEIGHT
    if "test" in lower or "spec" in lower:
        score -= TEST_PENALTY

    return score


def prioritize_files(paths: list[str], event_name: str, limit: int) -> list[str]:
    """Highest-scoring paths first (ties keep tree order), capped at ``limit``."""
    words = event_words(event_name)
    ranked = sorted(paths, key=lambda path: score_path(path, words), reverse=True)
    return ranked[:limit]


def has_event_hint(repo: GitHubRepo) -> bool:
    name = repo.name.lower()
    return any(hint in name for hint in REPO_NAME_HINTS)


def score_repository(repo: GitHubRepo, tokens: list[str]) -> int:
    """Relevance of a repository for a keyword search."""
    haystack = f"{repo.name} {repo.description or ''}".lower()
    score = sum(EVENT_WORD_WEIGHT for token in tokens if token in haystack)

    if has_event_hint(repo):
        score += ANALYTICS_WEIGHT
    if repo.language in SCRIPT_LANGUAGES:
        score += 2
    if repo.archived:
        score -= TEST_PENALTY

    return score


def rank_repositories(repos: list[GitHubRepo], tokens: list[str]) -> list[GitHubRepo]:
    return sorted(repos, key=lambda repo: score_repository(repo, tokens), reverse=True)
