"""Shared BDD fixtures and step definitions for CafeHub."""

import pytest
from cafehub.cafe.cafe import Cafe
from cafehub.cafe.registration import RegisterCafe
from cafehub.rating.rating import Rating
from cafehub.rating.submission import SubmitRating
from protean import current_domain
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def ratings():
    """Rating ids by author."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an active cafe "{name}"'), target_fixture="cafe_id")
def active_cafe(name):
    return current_domain.process(
        RegisterCafe(
            owner_id="owner-bdd",
            name=name,
            description="A cafe for behaviour scenarios.",
            city="Bengaluru",
            min_budget=100.0,
            max_budget=500.0,
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('"{user}" has rated the cafe {stars:d} stars'))
@when(parsers.cfparse('"{user}" rates the cafe {stars:d} stars'))
def user_rates_cafe(cafe_id, ratings, user, stars):
    result = current_domain.process(
        SubmitRating(user_id=user, cafe_id=cafe_id, rating=stars, review=f"{stars} stars from {user}."),
        asynchronous=False,
    )
    ratings[user] = result["rating_id"]


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cafe summary is {average:f} from {count:d} ratings"))
def cafe_summary_is(cafe_id, average, count):
    cafe = current_domain.repository_for(Cafe).get(cafe_id)
    assert cafe.rating_average == pytest.approx(average)
    assert cafe.rating_count == count


@then(parsers.cfparse("the cafe has {count:d} ratings"))
def cafe_has_n_ratings(cafe_id, count):
    assert sum(current_domain.repository_for(Rating).star_counts(cafe_id).values()) == count
