"""
Tests for the star mutation reconciler.
"""

import pytest

from conftest import make_page, make_star_result
from issue_browser.exceptions import MalformedMutationResult, PreconditionViolation
from issue_browser.models import GraphQLResult, Snapshot
from issue_browser.reconcile import reconcile_page, reconcile_star_mutation


class TestStarCount:
    """Local stargazer count adjustment."""

    def test_add_star_increments(self, loaded_snapshot):
        snapshot = reconcile_star_mutation(loaded_snapshot, make_star_result(add=True))

        assert snapshot.repository.stargazers.total_count == 43
        assert snapshot.repository.viewer_has_starred is True

    def test_remove_star_decrements(self):
        starred = reconcile_page(None, make_page(stargazers=10, viewer_has_starred=True), None)

        snapshot = reconcile_star_mutation(starred, make_star_result(add=False))

        assert snapshot.repository.stargazers.total_count == 9
        assert snapshot.repository.viewer_has_starred is False

    def test_round_trip(self, loaded_snapshot):
        """N -> N+1 starred -> N unstarred."""
        starred = reconcile_star_mutation(loaded_snapshot, make_star_result(add=True))
        unstarred = reconcile_star_mutation(starred, make_star_result(add=False))

        assert unstarred.repository.stargazers.total_count == 42
        assert unstarred.repository.viewer_has_starred is False
        assert unstarred == loaded_snapshot

    def test_viewer_has_starred_read_from_payload(self, loaded_snapshot):
        """The flag comes from the response, the count from the mutation kind."""
        result = make_star_result(add=True, viewer_has_starred=False)

        snapshot = reconcile_star_mutation(loaded_snapshot, result)

        assert snapshot.repository.viewer_has_starred is False
        assert snapshot.repository.stargazers.total_count == 43


class TestCarryOver:
    """Everything except the star fields is untouched."""

    def test_issues_and_identity_unchanged(self, loaded_snapshot):
        snapshot = reconcile_star_mutation(loaded_snapshot, make_star_result(add=True))

        assert snapshot.repository.issues == loaded_snapshot.repository.issues
        assert snapshot.repository.id == loaded_snapshot.repository.id
        assert snapshot.organization.name == loaded_snapshot.organization.name
        assert snapshot.organization.url == loaded_snapshot.organization.url

    def test_errors_unchanged(self):
        loaded = reconcile_page(None, make_page(errors=[{"message": "partial"}]), None)

        snapshot = reconcile_star_mutation(loaded, make_star_result(add=True))

        assert snapshot.error_messages == ["partial"]

    def test_input_not_modified(self, loaded_snapshot):
        reconcile_star_mutation(loaded_snapshot, make_star_result(add=True))

        assert loaded_snapshot.repository.stargazers.total_count == 42
        assert loaded_snapshot.repository.viewer_has_starred is False


class TestMalformed:
    """Responses without a star payload are rejected."""

    def test_empty_data(self, loaded_snapshot):
        with pytest.raises(MalformedMutationResult):
            reconcile_star_mutation(loaded_snapshot, GraphQLResult.model_validate({"data": {}}))

    def test_no_data_with_errors(self, loaded_snapshot):
        """Errors from the response are kept on the exception."""
        result = GraphQLResult.model_validate({
            "errors": [{"message": "Resource not accessible by integration"}],
        })

        with pytest.raises(MalformedMutationResult) as exc_info:
            reconcile_star_mutation(loaded_snapshot, result)

        assert "Resource not accessible by integration" in str(exc_info.value)
        assert exc_info.value.errors[0].message == "Resource not accessible by integration"

    def test_null_payload(self, loaded_snapshot):
        result = GraphQLResult.model_validate({
            "data": {"addStar": None},
            "errors": [{"message": "forbidden"}],
        })

        with pytest.raises(MalformedMutationResult):
            reconcile_star_mutation(loaded_snapshot, result)

    def test_missing_viewer_has_starred(self, loaded_snapshot):
        result = GraphQLResult.model_validate({"data": {"addStar": {"starrable": {}}}})

        with pytest.raises(MalformedMutationResult):
            reconcile_star_mutation(loaded_snapshot, result)

    def test_requires_loaded_repository(self):
        with pytest.raises(PreconditionViolation):
            reconcile_star_mutation(Snapshot(), make_star_result(add=True))
