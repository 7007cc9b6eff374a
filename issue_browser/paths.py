"""Parsing of ``organization/repository`` paths."""

from .exceptions import InvalidPathError


def parse_path(path: str) -> tuple[str, str]:
    """
    Split a path into (organization, repository) on the first ``/``.

    Everything after the first separator belongs to the repository token.

    Raises:
        InvalidPathError: No separator, or an empty token on either side.
    """
    organization, separator, repository = path.strip().partition("/")
    organization = organization.strip()
    repository = repository.strip()
    if not separator or not organization or not repository:
        raise InvalidPathError(path)
    return organization, repository


def is_valid_path(path: str) -> bool:
    try:
        parse_path(path)
    except InvalidPathError:
        return False
    return True
