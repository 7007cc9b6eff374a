"""
Pytest fixtures for issue browser tests.

Payload builders produce GitHub GraphQL responses in wire shape; the fake
transports stand in for the HTTP layer.
"""

import asyncio
from typing import Any, Optional

import pytest

from issue_browser.config import get_settings
from issue_browser.models import GraphQLResult, Snapshot
from issue_browser.reconcile import reconcile_page

REPOSITORY_ID = "R_kgDOwidgets"


def make_issue_edge(number: int, reactions: tuple[str, ...] = ()) -> dict:
    """One issue edge as returned by the issues query."""
    return {
        "node": {
            "id": f"I_{number}",
            "title": f"Issue {number}",
            "url": f"https://github.com/acme/widgets/issues/{number}",
            "reactions": {
                "edges": [
                    {"node": {"id": f"RE_{number}_{i}", "content": content}}
                    for i, content in enumerate(reactions)
                ]
            },
        }
    }


def make_page_payload(
    start: int = 1,
    count: int = 5,
    end_cursor: Optional[str] = "c1",
    has_next_page: bool = True,
    total_count: int = 12,
    stargazers: int = 42,
    viewer_has_starred: bool = False,
    errors: Optional[list[dict]] = None,
) -> dict:
    """Full issues query response body."""
    payload: dict[str, Any] = {
        "data": {
            "organization": {
                "name": "Acme",
                "url": "https://github.com/acme",
                "repository": {
                    "id": REPOSITORY_ID,
                    "name": "widgets",
                    "url": "https://github.com/acme/widgets",
                    "stargazers": {"totalCount": stargazers},
                    "viewerHasStarred": viewer_has_starred,
                    "issues": {
                        "edges": [make_issue_edge(n) for n in range(start, start + count)],
                        "totalCount": total_count,
                        "pageInfo": {"endCursor": end_cursor, "hasNextPage": has_next_page},
                    },
                },
            }
        }
    }
    if errors is not None:
        payload["errors"] = errors
    return payload


def make_page(**kwargs) -> GraphQLResult:
    return GraphQLResult.model_validate(make_page_payload(**kwargs))


def make_star_result(add: bool = True, viewer_has_starred: Optional[bool] = None) -> GraphQLResult:
    name = "addStar" if add else "removeStar"
    starred = add if viewer_has_starred is None else viewer_has_starred
    return GraphQLResult.model_validate(
        {"data": {name: {"starrable": {"viewerHasStarred": starred}}}}
    )


def edge_ids(snapshot: Snapshot) -> list[str]:
    return [edge.node.id for edge in snapshot.repository.issues.edges]


class FakeTransport:
    """Returns queued results in order and records every call."""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls: list[tuple[str, dict]] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    async def execute(self, document: str, variables: dict) -> GraphQLResult:
        self.calls.append((document, variables))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class GatedTransport(FakeTransport):
    """Like FakeTransport, but every call waits until ``release()``."""

    def __init__(self, responses=()):
        super().__init__(responses)
        self._gate: Optional[asyncio.Event] = None

    @property
    def gate(self) -> asyncio.Event:
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    def release(self) -> None:
        self.gate.set()

    async def execute(self, document: str, variables: dict) -> GraphQLResult:
        self.calls.append((document, variables))
        await self.gate.wait()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; start and end every test with an empty cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def first_page():
    """First page of acme/widgets: issues 1-5 of 12, next cursor c1."""
    return make_page(start=1, end_cursor="c1", has_next_page=True)


@pytest.fixture
def second_page():
    """Second page of acme/widgets: issues 6-10 of 12, next cursor c2."""
    return make_page(start=6, end_cursor="c2", has_next_page=True)


@pytest.fixture
def loaded_snapshot(first_page):
    """Snapshot after the first page was reconciled."""
    return reconcile_page(None, first_page, None)
