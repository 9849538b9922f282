"""Application tests for RatingRepository queries — paging, sorting, per-user lookup."""

import pytest
from cafehub.cafe.cafe import Cafe
from cafehub.cafe.lifecycle import DeactivateCafe
from cafehub.cafe.registration import RegisterCafe
from cafehub.rating.helpful import ToggleHelpful
from cafehub.rating.rating import Rating
from cafehub.rating.submission import SubmitRating
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _register_cafe(name="Paged Cafe", city="Pune"):
    return current_domain.process(
        RegisterCafe(
            owner_id="owner-001",
            name=name,
            description="Lots of reviews.",
            city=city,
            min_budget=100.0,
            max_budget=300.0,
        ),
        asynchronous=False,
    )


def _submit(cafe_id, user_id, rating):
    return current_domain.process(
        SubmitRating(user_id=user_id, cafe_id=cafe_id, rating=rating, review=f"Review by {user_id}."),
        asynchronous=False,
    )


def _repo():
    return current_domain.repository_for(Rating)


class TestListForCafe:
    def test_third_page_of_twenty_five(self):
        cafe_id = _register_cafe()
        for n in range(25):
            _submit(cafe_id, f"user-{n:02d}", n % 5 + 1)

        page = _repo().list_for_cafe(cafe_id, page=3, page_size=10)
        assert len(page.items) == 5
        assert page.total == 25
        assert page.total_pages == 3
        assert page.has_next is False
        assert page.has_prev is True

    def test_sort_by_stars(self):
        cafe_id = _register_cafe()
        for user, stars in [("u1", 3), ("u2", 5), ("u3", 1)]:
            _submit(cafe_id, user, stars)

        highest = _repo().list_for_cafe(cafe_id, sort_by="highest")
        assert [r.rating for r in highest.items] == [5, 3, 1]

        lowest = _repo().list_for_cafe(cafe_id, sort_by="lowest")
        assert [r.rating for r in lowest.items] == [1, 3, 5]

    @pytest.mark.parametrize("sort_by", ["mostHelpful", "helpful"])
    def test_sort_by_helpfulness(self, sort_by):
        cafe_id = _register_cafe()
        plain = _submit(cafe_id, "u1", 4)
        popular = _submit(cafe_id, "u2", 4)
        for voter in ("v1", "v2"):
            current_domain.process(ToggleHelpful(rating_id=popular["rating_id"], user_id=voter), asynchronous=False)

        page = _repo().list_for_cafe(cafe_id, sort_by=sort_by)
        assert [str(r.id) for r in page.items] == [popular["rating_id"], plain["rating_id"]]

    def test_only_this_cafes_ratings(self):
        cafe_a = _register_cafe()
        cafe_b = _register_cafe(name="Other")
        _submit(cafe_a, "u1", 4)
        _submit(cafe_b, "u1", 2)

        page = _repo().list_for_cafe(cafe_a)
        assert page.total == 1
        assert str(page.items[0].cafe_id) == cafe_a


class TestStarCounts:
    def test_counts_per_star(self):
        cafe_id = _register_cafe()
        for user, stars in [("u1", 5), ("u2", 5), ("u3", 4), ("u4", 3), ("u5", 1)]:
            _submit(cafe_id, user, stars)
        assert _repo().star_counts(cafe_id) == {5: 2, 4: 1, 3: 1, 2: 0, 1: 1}


class TestPerUserQueries:
    def test_get_for_user_cafe(self):
        cafe_id = _register_cafe()
        _submit(cafe_id, "u1", 4)
        rating = _repo().get_for_user_cafe("u1", cafe_id)
        assert rating.rating == 4

    def test_get_for_user_cafe_not_found(self):
        cafe_id = _register_cafe()
        with pytest.raises(ObjectNotFoundError):
            _repo().get_for_user_cafe("u1", cafe_id)

    def test_list_for_user(self):
        cafe_a = _register_cafe()
        cafe_b = _register_cafe(name="Second")
        _submit(cafe_a, "u1", 4)
        _submit(cafe_b, "u1", 2)
        _submit(cafe_b, "u2", 5)

        page = _repo().list_for_user("u1")
        assert page.total == 2
        assert {str(r.cafe_id) for r in page.items} == {cafe_a, cafe_b}


class TestCafeListing:
    def test_list_active_filters_city_and_inactive(self):
        pune = _register_cafe(name="Pune One", city="Pune")
        _register_cafe(name="Mumbai One", city="Mumbai")
        closed = _register_cafe(name="Pune Closed", city="Pune")
        current_domain.process(DeactivateCafe(cafe_id=closed, requested_by="owner-001"), asynchronous=False)

        page = current_domain.repository_for(Cafe).list_active(city="pune")
        assert [str(c.id) for c in page.items] == [pune]

    def test_list_active_sorted_by_rating(self):
        low = _register_cafe(name="Low")
        high = _register_cafe(name="High")
        _submit(low, "u1", 2)
        _submit(high, "u1", 5)

        page = current_domain.repository_for(Cafe).list_active(sort_by="rating")
        assert [str(c.id) for c in page.items] == [high, low]
