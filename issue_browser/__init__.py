"""
Repository Issue Browser.

Async client for the GitHub GraphQL API that lists the open issues of an
organization's repository page by page and toggles the viewer's star on it.

Usage:
    from issue_browser.github import GitHubGraphQLTransport
    from issue_browser.session import IssueSession

    async with GitHubGraphQLTransport() as transport:
        session = IssueSession(transport, path="acme/widgets")
        await session.submit()
        await session.fetch_more()

Modules:
    issue_browser.github     - GraphQL documents and the aiohttp transport
    issue_browser.models     - Immutable snapshot types
    issue_browser.reconcile  - Pure snapshot transitions
    issue_browser.session    - Intent state machine owning the snapshot
"""

__version__ = "1.0.0"
