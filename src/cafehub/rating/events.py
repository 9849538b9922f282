"""Domain events for the Rating aggregate.

`RatingSubmitted`, `RatingRevised` and `RatingRemoved` change a cafe's
rating set and drive the rating summary aggregator. `HelpfulMarkToggled`
never affects the cafe summary.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer

from cafehub.domain import cafehub


@cafehub.event(part_of="Rating")
class RatingSubmitted:
    """A user rated a cafe for the first time."""

    __version__ = 1

    rating_id = Identifier(required=True)
    cafe_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@cafehub.event(part_of="Rating")
class RatingRevised:
    """A user resubmitted their rating of a cafe."""

    __version__ = 1

    rating_id = Identifier(required=True)
    cafe_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    previous_rating = Integer(required=True)
    revised_at = DateTime(required=True)


@cafehub.event(part_of="Rating")
class RatingRemoved:
    """The author deleted their rating."""

    __version__ = 1

    rating_id = Identifier(required=True)
    cafe_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    removed_at = DateTime(required=True)


@cafehub.event(part_of="Rating")
class HelpfulMarkToggled:
    """A user marked or unmarked a review as helpful."""

    __version__ = 1

    rating_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    helpful_count = Integer(required=True)
    toggled_at = DateTime(required=True)
