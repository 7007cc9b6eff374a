"""
Pagination accumulator.

Folds one issues page response into the current snapshot. The first page
replaces the snapshot; every later page appends its edges after the edges
already held and takes everything else from the new response.
"""

from typing import Any, Optional

from pydantic import ValidationError

from issue_browser.exceptions import (
    IncompletePageError,
    MalformedPageError,
    PreconditionViolation,
)
from issue_browser.models import GraphQLResult, Organization, Snapshot


def _validate_organization(organization: Any, result: GraphQLResult) -> Organization:
    try:
        return Organization.model_validate(organization)
    except ValidationError as e:
        raise MalformedPageError(
            f"Issues page does not match the issues query: {e.error_count()} invalid fields",
            result.errors or (),
        ) from e


def reconcile_page(
    snapshot: Optional[Snapshot],
    result: GraphQLResult,
    cursor: Optional[str],
) -> Snapshot:
    """
    Produce the next snapshot from an issues page response.

    Args:
        snapshot: Current snapshot, None before the first load
        result: Response of the issues query
        cursor: Cursor the page was requested with, None for the first page

    Returns:
        New snapshot; errors are always those of ``result`` (replaced, not merged)

    Raises:
        PreconditionViolation: A next page arrived with no repository loaded
        IncompletePageError: A next page response lacks organization.repository
        MalformedPageError: The organization payload does not validate
    """
    data = result.data or {}

    if cursor is None:
        organization = data.get("organization")
        return Snapshot(
            organization=None if organization is None else _validate_organization(organization, result),
            errors=result.errors,
        )

    if snapshot is None or snapshot.repository is None:
        raise PreconditionViolation("Cannot merge a next page without a loaded repository")

    incoming = data.get("organization")
    if not isinstance(incoming, dict) or not incoming.get("repository"):
        raise IncompletePageError(result.errors or ())

    organization = _validate_organization(incoming, result)
    old_issues = snapshot.repository.issues.edges
    new_issues = organization.repository.issues

    issues = new_issues.model_copy(update={"edges": old_issues + new_issues.edges})
    repository = organization.repository.model_copy(update={"issues": issues})
    return Snapshot(
        organization=organization.model_copy(update={"repository": repository}),
        errors=result.errors,
    )
