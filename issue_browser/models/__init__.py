"""
Snapshot models.

Usage:
    from issue_browser.models import Snapshot, GraphQLResult, Organization
"""

from .snapshot import (
    GraphQLError,
    GraphQLResult,
    Issue,
    IssueConnection,
    IssueEdge,
    Organization,
    PageInfo,
    Reaction,
    ReactionConnection,
    ReactionEdge,
    Repository,
    Snapshot,
    Stargazers,
)

__all__ = [
    "GraphQLError",
    "GraphQLResult",
    "Issue",
    "IssueConnection",
    "IssueEdge",
    "Organization",
    "PageInfo",
    "Reaction",
    "ReactionConnection",
    "ReactionEdge",
    "Repository",
    "Snapshot",
    "Stargazers",
]
