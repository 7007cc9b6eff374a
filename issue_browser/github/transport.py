"""
Async GitHub GraphQL Transport.

Features:
- Async HTTP with aiohttp
- Bearer token authentication
- Per-request timeout
- Transport failures raised as TransportError, GraphQL errors returned as data

There is no retry: a failed request fails the intent that issued it.
"""

import asyncio
import json
from typing import Any, Dict, Optional, Protocol

import aiohttp
from pydantic import ValidationError

from issue_browser.config import get_settings
from issue_browser.exceptions import MissingTokenError, TransportError
from issue_browser.logging import get_logger
from issue_browser.models import GraphQLResult

logger = get_logger("github.transport")


class Transport(Protocol):
    """Executes one GraphQL operation and returns the response body."""

    async def execute(self, document: str, variables: Dict[str, Any]) -> GraphQLResult:
        ...


class GitHubGraphQLTransport:
    """
    aiohttp transport for the GitHub GraphQL endpoint.

    Example:
        async with GitHubGraphQLTransport(token) as transport:
            result = await transport.execute(document, variables)
            print(result.data, result.errors)
    """

    def __init__(
        self,
        token: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.token = token or settings.github_token
        if not self.token:
            raise MissingTokenError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.url = url or settings.graphql_url
        self.timeout = timeout or settings.request_timeout
        self.user_agent = settings.user_agent
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "GitHubGraphQLTransport":
        """Create aiohttp session on context entry."""
        self._session = aiohttp.ClientSession(
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json",
                "User-Agent": self.user_agent,
            },
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close session on context exit."""
        if self._session:
            await self._session.close()
            self._session = None

    async def execute(self, document: str, variables: Dict[str, Any]) -> GraphQLResult:
        """
        POST one operation and parse the response body.

        Raises:
            TransportError: connection failure, timeout, non-2xx status, or a
                body that is not a GraphQL response object
        """
        if not self._session:
            raise RuntimeError("Transport not initialized. Use 'async with' context.")

        try:
            async with self._session.post(
                self.url,
                json={"query": document, "variables": variables},
            ) as response:
                if not 200 <= response.status < 300:
                    text = await response.text()
                    logger.error("graphql_http_error", status=response.status, body=text[:500])
                    raise TransportError(
                        f"GitHub API error {response.status}", status=response.status
                    )
                text = await response.text()
        except asyncio.TimeoutError as e:
            logger.warning("graphql_request_timeout", timeout=self.timeout)
            raise TransportError(f"Request timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            logger.error("graphql_client_error", error=str(e))
            raise TransportError(f"Client error: {e}") from e

        return self._parse_body(text, response.status)

    @staticmethod
    def _parse_body(text: str, status: int) -> GraphQLResult:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise TransportError("Response body is not valid JSON", status=status) from e

        if not isinstance(payload, dict) or not ("data" in payload or "errors" in payload):
            raise TransportError("Response body is not a GraphQL response", status=status)

        try:
            result = GraphQLResult.model_validate(payload)
        except ValidationError as e:
            raise TransportError(f"Malformed GraphQL response: {e}", status=status) from e

        if result.errors:
            logger.warning("graphql_errors", messages=[error.message for error in result.errors])
        return result
