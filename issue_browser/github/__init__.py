"""
GitHub Module.

Provides:
- Fixed GraphQL documents for the issues page and the star mutations
- Async aiohttp transport executing them
"""

from .queries import (
    ADD_STAR_MUTATION,
    GET_ISSUES_OF_REPOSITORY_QUERY,
    REMOVE_STAR_MUTATION,
    build_add_star_mutation,
    build_issues_query,
    build_remove_star_mutation,
    build_star_mutation,
)


# Use lazy imports to avoid requiring aiohttp at import time
def __getattr__(name):
    if name == "GitHubGraphQLTransport":
        from .transport import GitHubGraphQLTransport
        return GitHubGraphQLTransport
    elif name == "Transport":
        from .transport import Transport
        return Transport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "GitHubGraphQLTransport",
    "Transport",
    "GET_ISSUES_OF_REPOSITORY_QUERY",
    "ADD_STAR_MUTATION",
    "REMOVE_STAR_MUTATION",
    "build_issues_query",
    "build_add_star_mutation",
    "build_remove_star_mutation",
    "build_star_mutation",
]
