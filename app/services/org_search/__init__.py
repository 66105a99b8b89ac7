"""
Organization-wide event search.

Module structure:
- orchestrator.py: Two-phase search (exact match, then fallback guidance)
- prioritizer.py: File and repository ordering heuristics
- tokens.py: Keyword extraction for broader searches
- cross_repo.py: Cross-repository property analysis
"""

from app.services.org_search.cross_repo import RepositoryMatches, analyze_cross_repo_patterns
from app.services.org_search.orchestrator import OrgEventSearchOrchestrator, SearchPhase
from app.services.org_search.prioritizer import prioritize_files, rank_repositories
from app.services.org_search.tokens import extract_search_tokens

__all__ = [
    "OrgEventSearchOrchestrator",
    "RepositoryMatches",
    "SearchPhase",
    "analyze_cross_repo_patterns",
    "extract_search_tokens",
    "prioritize_files",
    "rank_repositories",
]
