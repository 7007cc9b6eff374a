"""
Star mutation reconciler.

Applies an addStar/removeStar response to the snapshot without re-fetching.
The mutation does not return a stargazer count, so the count is adjusted
locally by one in the direction of the mutation. Stars added or removed by
others in the meantime are not reflected until the next first-page load.
"""

from issue_browser.exceptions import MalformedMutationResult, PreconditionViolation
from issue_browser.models import GraphQLResult, Snapshot

STAR_PAYLOADS = {"addStar": 1, "removeStar": -1}


def reconcile_star_mutation(snapshot: Snapshot, result: GraphQLResult) -> Snapshot:
    """
    Patch ``viewer_has_starred`` and the stargazer count of the loaded repository.

    Everything else, including the snapshot's errors, is carried over.

    Raises:
        MalformedMutationResult: Neither ``addStar`` nor ``removeStar`` present
        PreconditionViolation: No repository loaded
    """
    if snapshot is None or snapshot.repository is None:
        raise PreconditionViolation("Cannot apply a star mutation without a loaded repository")

    data = result.data or {}
    payload_name = next((name for name in STAR_PAYLOADS if data.get(name)), None)
    if payload_name is None:
        raise MalformedMutationResult(
            "Mutation result has neither addStar nor removeStar", result.errors or ()
        )

    starrable = data[payload_name].get("starrable") or {}
    if "viewerHasStarred" not in starrable:
        raise MalformedMutationResult(
            f"{payload_name} payload is missing starrable.viewerHasStarred",
            result.errors or (),
        )

    repository = snapshot.repository
    stargazers = repository.stargazers.model_copy(
        update={"total_count": repository.stargazers.total_count + STAR_PAYLOADS[payload_name]}
    )
    repository = repository.model_copy(
        update={
            "viewer_has_starred": bool(starrable["viewerHasStarred"]),
            "stargazers": stargazers,
        }
    )
    organization = snapshot.organization.model_copy(update={"repository": repository})
    return snapshot.model_copy(update={"organization": organization})
