# Output formatters for the issues view

import json
from typing import Optional

from issue_browser.models import Repository, Snapshot


def format_text(snapshot: Optional[Snapshot]) -> str:
    """
    Format a snapshot as plain text.

    Returns - Formatted text string
    """
    if snapshot is None or (snapshot.organization is None and not snapshot.errors):
        return "No information yet ...\n"

    if snapshot.errors:
        return "Something went wrong: " + " ".join(snapshot.error_messages) + "\n"

    organization = snapshot.organization
    output = [f"Issues from Organization: {organization.name or 'N/A'} ({organization.url})"]
    if organization.repository is not None:
        output.extend(_format_repository(organization.repository))
    return "\n".join(output) + "\n"


def _format_repository(repository: Repository) -> list[str]:
    issues = repository.issues
    star_label = "Unstar" if repository.viewer_has_starred else "Star"
    output = [
        f"In Repository: {repository.name} ({repository.url})",
        f"[{repository.stargazers.total_count} {star_label}]",
        f"Showing {len(issues.edges)} of {issues.total_count} open issues",
        "",
    ]

    resolved = [edge.node for edge in issues.edges if edge.node is not None]
    for i, issue in enumerate(resolved, 1):
        output.append(f"{i}. {issue.title}")
        output.append(f"   URL: {issue.url}")
        reactions = issue.reaction_contents
        if reactions:
            output.append(f"   Reactions: {', '.join(reactions)}")

    if issues.page_info.has_next_page:
        output.append("")
        output.append("More issues available")
    return output


def format_json(snapshot: Optional[Snapshot]) -> str:
    """
    Format a snapshot as JSON in wire shape.

    Returns - JSON string
    """
    if snapshot is None:
        return json.dumps(None)
    return json.dumps(snapshot.model_dump(mode="json", by_alias=True), indent=2)


def format_output(snapshot: Optional[Snapshot], format_type: str = "text") -> str:
    if format_type == "json":
        return format_json(snapshot)
    return format_text(snapshot)
