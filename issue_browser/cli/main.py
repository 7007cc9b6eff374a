"""
Issue Browser CLI.

Lists open issues of a repository page by page and toggles its star.

    issue-browser issues acme/widgets --pages 3
    issue-browser star acme/widgets --format json
"""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

from issue_browser.cli.formatters import format_output
from issue_browser.config import get_settings
from issue_browser.exceptions import IssueBrowserError
from issue_browser.github.transport import GitHubGraphQLTransport, Transport
from issue_browser.logging import configure_logging, get_logger
from issue_browser.paths import is_valid_path
from issue_browser.session import IssueSession

load_dotenv()

logger = get_logger("cli")


def _path_arg(value: str) -> str:
    if not is_valid_path(value):
        raise argparse.ArgumentTypeError(
            f"invalid path {value!r}: expected 'organization/repository'"
        )
    return value


def _pages_arg(value: str) -> int:
    pages = int(value)
    if pages < 1:
        raise argparse.ArgumentTypeError("--pages must be at least 1")
    return pages


async def list_issues(transport: Transport, path: str, pages: int = 1) -> IssueSession:
    """Load the first page and up to ``pages - 1`` more while a next page exists."""
    session = IssueSession(transport, path=path)
    await session.submit()
    for _ in range(pages - 1):
        repository = session.snapshot.repository
        if repository is None or not repository.issues.page_info.has_next_page:
            break
        await session.fetch_more()
    return session


async def toggle_star(transport: Transport, path: str) -> IssueSession:
    """Load the repository and flip the viewer's star on it."""
    session = IssueSession(transport, path=path)
    await session.submit()
    repository = session.snapshot.repository
    if repository is not None:
        await session.toggle_star(repository.id, repository.viewer_has_starred)
    return session


async def _run(args: argparse.Namespace) -> IssueSession:
    async with GitHubGraphQLTransport() as transport:
        if args.command == "star":
            return await toggle_star(transport, args.path)
        return await list_issues(transport, args.path, args.pages)


def build_parser() -> argparse.ArgumentParser:
    default_path = get_settings().default_path

    parser = argparse.ArgumentParser(
        prog="issue-browser",
        description="Show open issues of a GitHub repository and star it",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    issues_parser = subparsers.add_parser("issues", help="List open issues")
    issues_parser.add_argument(
        "path",
        nargs="?",
        default=default_path,
        type=_path_arg,
        help="organization/repository (default: %(default)s)",
    )
    issues_parser.add_argument(
        "--pages", type=_pages_arg, default=1, help="Number of pages to load (default: 1)"
    )

    star_parser = subparsers.add_parser("star", help="Toggle the star on a repository")
    star_parser.add_argument(
        "path",
        nargs="?",
        default=default_path,
        type=_path_arg,
        help="organization/repository (default: %(default)s)",
    )

    for sub in (issues_parser, star_parser):
        sub.add_argument("--format", choices=["text", "json"], default="text")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        session = asyncio.run(_run(args))
    except IssueBrowserError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_output(session.snapshot, args.format), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
