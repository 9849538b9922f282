"""Application tests for RemoveRating — author-only deletion."""

import pytest
from cafehub.cafe.registration import RegisterCafe
from cafehub.rating.helpful import ToggleHelpful
from cafehub.rating.rating import HelpfulVote, Rating
from cafehub.rating.removal import RemoveRating
from cafehub.rating.submission import SubmitRating
from cafehub.shared.errors import ForbiddenError
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _rated_cafe():
    cafe_id = current_domain.process(
        RegisterCafe(
            owner_id="owner-001",
            name="Corner Cup",
            description="Neighbourhood cafe.",
            city="Chennai",
            min_budget=50.0,
            max_budget=250.0,
        ),
        asynchronous=False,
    )
    result = current_domain.process(
        SubmitRating(user_id="author-001", cafe_id=cafe_id, rating=4, review="Great filter coffee."),
        asynchronous=False,
    )
    return cafe_id, result["rating_id"]


class TestRemoveRating:
    def test_author_removes_rating(self):
        _, rating_id = _rated_cafe()
        current_domain.process(RemoveRating(rating_id=rating_id, requested_by="author-001"), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Rating).get(rating_id)

    def test_helpful_votes_removed_with_rating(self):
        _, rating_id = _rated_cafe()
        current_domain.process(ToggleHelpful(rating_id=rating_id, user_id="user-002"), asynchronous=False)
        current_domain.process(RemoveRating(rating_id=rating_id, requested_by="author-001"), asynchronous=False)

        votes = current_domain.repository_for(HelpfulVote)._dao.query.all().items
        assert votes == []

    def test_stranger_forbidden(self):
        _, rating_id = _rated_cafe()
        with pytest.raises(ForbiddenError) as exc:
            current_domain.process(RemoveRating(rating_id=rating_id, requested_by="user-002"), asynchronous=False)
        assert exc.value.message == "Not authorized to delete this rating"

        rating = current_domain.repository_for(Rating).get(rating_id)
        assert rating.rating == 4

    def test_cafe_owner_cannot_remove_others_rating(self):
        _, rating_id = _rated_cafe()
        with pytest.raises(ForbiddenError):
            current_domain.process(RemoveRating(rating_id=rating_id, requested_by="owner-001"), asynchronous=False)

    def test_missing_rating_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                RemoveRating(rating_id="no-such-rating", requested_by="author-001"), asynchronous=False
            )

    def test_author_can_rate_again_after_removal(self):
        cafe_id, rating_id = _rated_cafe()
        current_domain.process(RemoveRating(rating_id=rating_id, requested_by="author-001"), asynchronous=False)

        result = current_domain.process(
            SubmitRating(user_id="author-001", cafe_id=cafe_id, rating=2, review="Trying again."),
            asynchronous=False,
        )
        assert result["created"] is True
        assert result["rating_id"] != rating_id

        rating = current_domain.repository_for(Rating).get_for_user_cafe("author-001", cafe_id)
        assert rating.rating == 2
        assert rating.helpful_count == 0
