"""
Issue browsing session.

Owns the path being browsed and the current snapshot, and turns the user's
intents (submit, fetch more, toggle star) into transport calls followed by a
pure reconciliation step. The snapshot is only ever replaced here.

States:
    IDLE    - nothing loaded yet
    LOADING - a page request is in flight
    LOADED  - a snapshot is available

At most one page request is in flight per session. Each page request is
tagged with the path it was issued for, and a response for a path the session
has since moved away from is discarded.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from issue_browser.config import get_settings
from issue_browser.exceptions import (
    IncompletePageError,
    IssueBrowserError,
    MalformedMutationResult,
    PreconditionViolation,
    RequestInFlightError,
    TransportError,
)
from issue_browser.github.queries import build_issues_query, build_star_mutation
from issue_browser.github.transport import Transport
from issue_browser.logging import LogContext, get_logger
from issue_browser.models import GraphQLError, Snapshot
from issue_browser.paths import parse_path
from issue_browser.reconcile import reconcile_page, reconcile_star_mutation

logger = get_logger("session")


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class PageRequest:
    """
    Tag of a dispatched page request.

    ``path`` is what the request fetches; ``session_path`` is the session's
    path when it was dispatched. The response is discarded if the session path
    changed meanwhile.
    """

    path: str
    session_path: str
    cursor: Optional[str] = None


class IssueSession:
    """
    Intent state machine over one snapshot.

    Usage:
        session = IssueSession(transport, path="acme/widgets")
        await session.submit()
        if session.snapshot.repository.issues.page_info.has_next_page:
            await session.fetch_more()
        await session.toggle_star(repo.id, repo.viewer_has_starred)
    """

    def __init__(self, transport: Transport, path: Optional[str] = None):
        self.transport = transport
        self._path = path if path is not None else get_settings().default_path
        self._loaded_path: Optional[str] = None
        self._snapshot: Optional[Snapshot] = None
        self._status = SessionStatus.IDLE
        self._in_flight: Optional[PageRequest] = None
        self.last_failure: Optional[Exception] = None

    # Read-only surface

    @property
    def path(self) -> str:
        return self._path

    @property
    def loaded_path(self) -> Optional[str]:
        """Path the current snapshot was loaded for."""
        return self._loaded_path

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    @property
    def errors(self) -> Optional[tuple[GraphQLError, ...]]:
        if self._snapshot is None:
            return None
        return self._snapshot.errors

    @property
    def in_flight(self) -> Optional[PageRequest]:
        return self._in_flight

    # Intents

    def set_path(self, path: str) -> None:
        """Change the path. Does not fetch."""
        self._path = path

    async def submit(self) -> Optional[Snapshot]:
        """
        Load the first page for the current path, replacing the snapshot.

        Raises:
            InvalidPathError: Path is not ``organization/repository``
            RequestInFlightError: Another page request is in flight
            MalformedPageError: The page does not validate; the snapshot is unchanged
            TransportError: The request failed; the snapshot is unchanged
        """
        parse_path(self._path)
        return await self._fetch_page(PageRequest(path=self._path, session_path=self._path))

    async def fetch_more(self) -> Optional[Snapshot]:
        """
        Load the next page of the loaded repository and append it.

        Raises:
            PreconditionViolation: Not loaded, or no next page
            RequestInFlightError: Another page request is in flight
            IncompletePageError: The page came back without the repository
            MalformedPageError: The page does not validate; the snapshot is unchanged
            TransportError: The request failed; the snapshot is unchanged
        """
        if self._status is not SessionStatus.LOADED or self._snapshot is None:
            raise PreconditionViolation("fetch_more requires a loaded session")
        repository = self._snapshot.repository
        if repository is None:
            raise PreconditionViolation("fetch_more requires a loaded repository")
        page_info = repository.issues.page_info
        if not page_info.has_next_page:
            raise PreconditionViolation("fetch_more called with no next page")

        return await self._fetch_page(
            PageRequest(
                path=self._loaded_path,
                session_path=self._path,
                cursor=page_info.end_cursor,
            )
        )

    async def toggle_star(
        self,
        repository_id: str,
        viewer_has_starred: bool,
    ) -> Optional[Snapshot]:
        """
        Star the repository if not starred by the viewer, unstar it otherwise.

        Raises:
            PreconditionViolation: No repository loaded, or another one is loaded
            MalformedMutationResult: Response has neither addStar nor removeStar
            TransportError: The request failed; the snapshot is unchanged
        """
        if self._snapshot is None or self._snapshot.repository is None:
            raise PreconditionViolation("toggle_star requires a loaded repository")
        if repository_id != self._snapshot.repository.id:
            raise PreconditionViolation(
                f"toggle_star for {repository_id!r} but {self._snapshot.repository.id!r} is loaded"
            )

        document, variables = build_star_mutation(repository_id, viewer_has_starred)
        with LogContext(intent="toggle_star", repository_id=repository_id):
            logger.info("star_mutation_started", add=not viewer_has_starred)
            try:
                result = await self.transport.execute(document, variables)
            except TransportError as e:
                self.last_failure = e
                logger.error("transport_failed", error=str(e), status=e.status)
                raise

            current = self._snapshot.repository if self._snapshot else None
            if current is None or current.id != repository_id:
                logger.warning("stale_response_discarded")
                return self._snapshot

            try:
                self._snapshot = reconcile_star_mutation(self._snapshot, result)
            except MalformedMutationResult as e:
                self.last_failure = e
                logger.error("malformed_mutation_result", error=str(e))
                raise
            self.last_failure = None
            repository = self._snapshot.repository
            logger.info(
                "star_toggled",
                viewer_has_starred=repository.viewer_has_starred,
                stargazers=repository.stargazers.total_count,
            )
        return self._snapshot

    # Internals

    async def _fetch_page(self, request: PageRequest) -> Optional[Snapshot]:
        if self._in_flight is not None:
            raise RequestInFlightError(
                f"A page request for {self._in_flight.path!r} is already in flight"
            )

        organization, repository = parse_path(request.path)
        document, variables = build_issues_query(organization, repository, request.cursor)
        previous_status = self._status
        self._in_flight = request
        self._status = SessionStatus.LOADING

        with LogContext(path=request.path, cursor=request.cursor):
            logger.info("page_fetch_started")
            try:
                result = await self.transport.execute(document, variables)
            except TransportError as e:
                self.last_failure = e
                self._status = previous_status
                logger.error("transport_failed", error=str(e), status=e.status)
                raise
            except asyncio.CancelledError:
                self._status = previous_status
                raise
            finally:
                self._in_flight = None

            if request.session_path != self._path:
                self._status = previous_status
                logger.warning("stale_response_discarded", current_path=self._path)
                return self._snapshot

            try:
                snapshot = reconcile_page(self._snapshot, result, request.cursor)
            except IncompletePageError as e:
                self._snapshot = self._snapshot.model_copy(update={"errors": e.errors or None})
                self._status = previous_status
                self.last_failure = e
                logger.error("page_incomplete", error=str(e))
                raise
            except IssueBrowserError as e:
                self._status = previous_status
                self.last_failure = e
                logger.error("page_rejected", error=str(e), error_type=type(e).__name__)
                raise

            self._snapshot = snapshot
            self._loaded_path = request.path
            self._status = SessionStatus.LOADED
            self.last_failure = None
            repository = snapshot.repository
            logger.info(
                "page_reconciled",
                edges=len(repository.issues.edges) if repository else 0,
                total_count=repository.issues.total_count if repository else 0,
                errors=len(snapshot.errors or ()),
            )
        return self._snapshot
