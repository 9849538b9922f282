"""Application tests for RatingSummaryAggregator — the cafe summary follows its ratings."""

from unittest.mock import patch

from cafehub.cafe.cafe import Cafe
from cafehub.cafe.registration import RegisterCafe
from cafehub.rating.helpful import ToggleHelpful
from cafehub.rating.rating import Rating
from cafehub.rating.removal import RemoveRating
from cafehub.rating.submission import SubmitRating
from cafehub.rating.summary import RatingSummaryAggregator, summarize
from protean import current_domain


def _register_cafe(owner_id="owner-001"):
    return current_domain.process(
        RegisterCafe(
            owner_id=owner_id,
            name="Roastery",
            description="Beans roasted on site.",
            city="Pune",
            min_budget=100.0,
            max_budget=400.0,
        ),
        asynchronous=False,
    )


def _submit(cafe_id, user_id, rating):
    return current_domain.process(
        SubmitRating(user_id=user_id, cafe_id=cafe_id, rating=rating, review=f"{rating} stars from {user_id}."),
        asynchronous=False,
    )


def _summary(cafe_id):
    cafe = current_domain.repository_for(Cafe).get(cafe_id)
    return cafe.rating_average, cafe.rating_count


def _recomputed(cafe_id):
    return summarize(current_domain.repository_for(Rating).star_counts(cafe_id))


class TestSummaryFollowsRatings:
    def test_new_cafe_has_empty_summary(self):
        cafe_id = _register_cafe()
        assert _summary(cafe_id) == (0.0, 0)

    def test_submit_update_delete_sequence(self):
        cafe_id = _register_cafe()

        _submit(cafe_id, "user-a", 4)
        assert _summary(cafe_id) == (4.0, 1)

        second = _submit(cafe_id, "user-b", 5)
        assert _summary(cafe_id) == (4.5, 2)

        _submit(cafe_id, "user-a", 2)
        assert _summary(cafe_id) == (3.5, 2)

        current_domain.process(RemoveRating(rating_id=second["rating_id"], requested_by="user-b"), asynchronous=False)
        assert _summary(cafe_id) == (2.0, 1)

    def test_summary_matches_full_recompute(self):
        cafe_id = _register_cafe()
        for user, stars in [("u1", 5), ("u2", 3), ("u3", 4), ("u4", 1), ("u2", 5), ("u5", 4)]:
            _submit(cafe_id, user, stars)
            assert _summary(cafe_id) == _recomputed(cafe_id)

    def test_other_cafes_unaffected(self):
        cafe_a = _register_cafe()
        cafe_b = _register_cafe()
        _submit(cafe_a, "user-a", 5)
        assert _summary(cafe_b) == (0.0, 0)

    def test_removing_last_rating_resets_summary(self):
        cafe_id = _register_cafe()
        result = _submit(cafe_id, "user-a", 3)
        current_domain.process(RemoveRating(rating_id=result["rating_id"], requested_by="user-a"), asynchronous=False)
        assert _summary(cafe_id) == (0.0, 0)

    def test_helpful_toggle_leaves_summary_alone(self):
        cafe_id = _register_cafe()
        result = _submit(cafe_id, "user-a", 3)
        current_domain.process(ToggleHelpful(rating_id=result["rating_id"], user_id="user-b"), asynchronous=False)
        assert _summary(cafe_id) == (3.0, 1)


class TestRecompute:
    def test_recompute_is_idempotent(self):
        cafe_id = _register_cafe()
        _submit(cafe_id, "user-a", 4)
        _submit(cafe_id, "user-b", 3)

        assert RatingSummaryAggregator.recompute(cafe_id) == (3.5, 2)
        assert RatingSummaryAggregator.recompute(cafe_id) == (3.5, 2)
        assert _summary(cafe_id) == (3.5, 2)

    def test_recompute_for_missing_cafe_is_a_no_op(self):
        assert RatingSummaryAggregator.recompute("no-such-cafe") is None

    def test_write_back_failure_is_swallowed(self):
        cafe_id = _register_cafe()

        with patch.object(Cafe, "refresh_rating_summary", side_effect=RuntimeError("store down")):
            result = _submit(cafe_id, "user-a", 5)

        # The rating itself is committed; only the summary is stale
        rating = current_domain.repository_for(Rating).get(result["rating_id"])
        assert rating.rating == 5
        assert _summary(cafe_id) == (0.0, 0)

        # The next recompute catches up
        assert RatingSummaryAggregator.recompute(cafe_id) == (5.0, 1)
        assert _summary(cafe_id) == (5.0, 1)
