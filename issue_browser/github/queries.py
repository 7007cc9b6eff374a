"""
GitHub GraphQL Documents.

Fixed query and mutation texts plus builders returning (document, variables).
Values always travel as variables; nothing is interpolated into a document.
"""

from typing import Any, Optional

# Open issues of a repository, 5 per page, with the 3 most recent reactions
GET_ISSUES_OF_REPOSITORY_QUERY = """
query GetIssuesOfRepository(
  $organization: String!,
  $repository: String!,
  $cursor: String
) {
  organization(login: $organization) {
    name
    url
    repository(name: $repository) {
      id
      name
      url
      stargazers {
        totalCount
      }
      viewerHasStarred
      issues(first: 5, after: $cursor, states: [OPEN]) {
        edges {
          node {
            id
            title
            url
            reactions(last: 3) {
              edges {
                node {
                  id
                  content
                }
              }
            }
          }
        }
        totalCount
        pageInfo {
          endCursor
          hasNextPage
        }
      }
    }
  }
}
"""

ADD_STAR_MUTATION = """
mutation AddStar($repositoryId: ID!) {
  addStar(input: {starrableId: $repositoryId}) {
    starrable {
      viewerHasStarred
    }
  }
}
"""

REMOVE_STAR_MUTATION = """
mutation RemoveStar($repositoryId: ID!) {
  removeStar(input: {starrableId: $repositoryId}) {
    starrable {
      viewerHasStarred
    }
  }
}
"""


def build_issues_query(
    organization: str,
    repository: str,
    cursor: Optional[str] = None,
) -> tuple[str, dict[str, Any]]:
    """
    Build the issues page query.

    Args:
        organization: Organization login
        repository: Repository name
        cursor: ``endCursor`` of the previous page, None for the first page

    Returns:
        Tuple of (document, variables)
    """
    variables = {
        "organization": organization,
        "repository": repository,
        "cursor": cursor,
    }
    return GET_ISSUES_OF_REPOSITORY_QUERY, variables


def build_add_star_mutation(repository_id: str) -> tuple[str, dict[str, Any]]:
    return ADD_STAR_MUTATION, {"repositoryId": repository_id}


def build_remove_star_mutation(repository_id: str) -> tuple[str, dict[str, Any]]:
    return REMOVE_STAR_MUTATION, {"repositoryId": repository_id}


def build_star_mutation(
    repository_id: str,
    viewer_has_starred: bool,
) -> tuple[str, dict[str, Any]]:
    """Add a star when the viewer has not starred yet, remove it otherwise."""
    if viewer_has_starred:
        return build_remove_star_mutation(repository_id)
    return build_add_star_mutation(repository_id)
