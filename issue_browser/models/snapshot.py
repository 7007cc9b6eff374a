"""
Immutable snapshot of the repository issues view.

Field names are snake_case in Python and camelCase on the wire (aliases), so a
GraphQL payload validates as-is and ``model_dump(by_alias=True)`` gives the
wire shape back. Sequences are tuples; models are frozen. Transitions build
new instances with ``model_copy(update=...)``.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Frozen base model with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


# =============================================================================
# Errors
# =============================================================================

class GraphQLError(WireModel):
    """One entry of a GraphQL response's ``errors`` array."""

    message: str
    type: Optional[str] = None
    path: Optional[tuple[str | int, ...]] = None
    locations: Optional[tuple[dict[str, int], ...]] = None


# =============================================================================
# Issues
# =============================================================================

def _null_edges_to_empty(value: Any) -> Any:
    """GitHub nulls a connection's edges, or single edges, on partial failure."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(edge for edge in value if edge is not None)
    return value


class Reaction(WireModel):
    id: str
    content: str


class ReactionEdge(WireModel):
    node: Optional[Reaction] = None


class ReactionConnection(WireModel):
    """Most recent reactions of an issue, in insertion order."""

    edges: tuple[ReactionEdge, ...] = ()

    @field_validator("edges", mode="before")
    @classmethod
    def drop_null_edges(cls, v: Any) -> Any:
        return _null_edges_to_empty(v)


class Issue(WireModel):
    id: str
    title: str
    url: str
    reactions: Optional[ReactionConnection] = Field(default_factory=ReactionConnection)

    @property
    def reaction_contents(self) -> list[str]:
        if self.reactions is None:
            return []
        return [edge.node.content for edge in self.reactions.edges if edge.node is not None]


class IssueEdge(WireModel):
    """One issue of a page. ``node`` is None when GitHub could not resolve it."""

    node: Optional[Issue] = None


class PageInfo(WireModel):
    """Cursor state of a connection. ``end_cursor`` is None on an empty page."""

    end_cursor: Optional[str] = None
    has_next_page: bool = False


class IssueConnection(WireModel):
    """
    Accumulated issues of a repository.

    ``edges`` only grows by concatenation in fetch order. ``total_count`` is
    the server's global count and is unrelated to ``len(edges)``.
    """

    edges: tuple[IssueEdge, ...] = ()
    total_count: int = 0
    page_info: PageInfo = Field(default_factory=PageInfo)

    @field_validator("edges", mode="before")
    @classmethod
    def drop_null_edges(cls, v: Any) -> Any:
        return _null_edges_to_empty(v)


# =============================================================================
# Repository / Organization
# =============================================================================

class Stargazers(WireModel):
    total_count: int = 0


class Repository(WireModel):
    id: str
    name: str
    url: str
    viewer_has_starred: bool = False
    stargazers: Stargazers = Field(default_factory=Stargazers)
    issues: IssueConnection = Field(default_factory=IssueConnection)


class Organization(WireModel):
    name: Optional[str] = None
    url: str
    repository: Optional[Repository] = None


# =============================================================================
# Snapshot / Result
# =============================================================================

class Snapshot(WireModel):
    """Last known server state as rendered by the presentation layer."""

    organization: Optional[Organization] = None
    errors: Optional[tuple[GraphQLError, ...]] = None

    @property
    def repository(self) -> Optional[Repository]:
        if self.organization is None:
            return None
        return self.organization.repository

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors or ()]


class GraphQLResult(WireModel):
    """
    Body of a GraphQL response.

    A 2xx response may carry ``errors`` next to usable ``data``; both are kept.
    ``data`` stays a raw mapping so each reconciler validates only the part it
    reads.
    """

    data: Optional[dict[str, Any]] = None
    errors: Optional[tuple[GraphQLError, ...]] = None
