"""Rating aggregate — one user's star rating and review of one cafe.

A user holds at most one Rating per cafe. Every Rating gets its own
identity; `user_cafe_key`, derived from the (cafe, user) pair, is unique in
the store, so a second row for the same pair is rejected on insert. A user
who deletes a rating and rates again starts a fresh Rating.

Resubmitting revises the rating in place. Helpful marks are child entities,
one per voting user, and `helpful_count` is always the size of that set.
"""

import uuid
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from cafehub.domain import cafehub
from cafehub.rating.events import (
    HelpfulMarkToggled,
    RatingRemoved,
    RatingRevised,
    RatingSubmitted,
)

MAX_REVIEW_LENGTH = 1000
ASPECT_NAMES = ("food", "service", "ambiance", "value")

_RATING_KEY_NAMESPACE = uuid.UUID("8b7e4a2c-5d1f-4c39-9e0b-3a6f2d8c1e57")


def pair_key(user_id, cafe_id):
    """Uniqueness key of the rating `user_id` leaves for `cafe_id`."""
    return str(uuid.uuid5(_RATING_KEY_NAMESPACE, f"{cafe_id}:{user_id}"))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@cafehub.value_object(part_of="Rating")
class Aspects:
    """Optional 1-5 sub-scores for individual aspects of a visit."""

    food = Integer(min_value=1, max_value=5)
    service = Integer(min_value=1, max_value=5)
    ambiance = Integer(min_value=1, max_value=5)
    value = Integer(min_value=1, max_value=5)

    @classmethod
    def from_scores(cls, scores):
        """Build from a mapping of aspect scores, ignoring missing ones. None if nothing was scored."""
        supplied = {name: scores[name] for name in ASPECT_NAMES if scores.get(name) is not None}
        return cls(**supplied) if supplied else None

    def merged_with(self, scores):
        """A copy with the supplied scores overwritten and every other score kept."""
        current = {name: getattr(self, name) for name in ASPECT_NAMES}
        current.update({name: scores[name] for name in ASPECT_NAMES if scores.get(name) is not None})
        return Aspects.from_scores(current)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@cafehub.entity(part_of="Rating")
class HelpfulVote:
    """A user's mark that the review was helpful."""

    user_id = Identifier(required=True)
    marked_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@cafehub.aggregate
class Rating:
    user_id = Identifier(required=True)
    cafe_id = Identifier(required=True)
    user_cafe_key = String(required=True, unique=True, max_length=36)

    rating = Integer(required=True, min_value=1, max_value=5)
    review = String(required=True, max_length=MAX_REVIEW_LENGTH)
    aspects = ValueObject(Aspects)

    helpful_votes = HasMany(HelpfulVote)
    helpful_count = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def review_must_not_be_blank(self):
        if self.review is not None and not self.review.strip():
            raise ValidationError({"review": ["Review cannot be empty"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, user_id, cafe_id, rating, review, aspects=None):
        """First rating of `cafe_id` by `user_id`. `aspects` maps aspect names to scores."""
        now = datetime.now(UTC)

        new_rating = cls(
            user_id=user_id,
            cafe_id=cafe_id,
            user_cafe_key=pair_key(user_id, cafe_id),
            rating=rating,
            review=review,
            aspects=Aspects.from_scores(aspects or {}),
            helpful_count=0,
            created_at=now,
            updated_at=now,
        )

        new_rating.raise_(
            RatingSubmitted(
                rating_id=str(new_rating.id),
                cafe_id=str(cafe_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )

        return new_rating

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_authored_by(self, user_id):
        return str(self.user_id) == str(user_id)

    def helpful_vote_from(self, user_id):
        return next((v for v in self.helpful_votes if str(v.user_id) == str(user_id)), None)

    # -------------------------------------------------------------------
    # Revision
    # -------------------------------------------------------------------
    def revise(self, rating, review, aspects=None):
        """Overwrite the stars and review; only the supplied aspect scores change."""
        now = datetime.now(UTC)
        previous_rating = self.rating

        with atomic_change(self):
            self.rating = rating
            self.review = review
            if aspects:
                self.aspects = self.aspects.merged_with(aspects) if self.aspects else Aspects.from_scores(aspects)
            self.updated_at = now

        self.raise_(
            RatingRevised(
                rating_id=str(self.id),
                cafe_id=str(self.cafe_id),
                user_id=str(self.user_id),
                rating=rating,
                previous_rating=previous_rating,
                revised_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Helpful marks
    # -------------------------------------------------------------------
    def toggle_helpful(self, user_id):
        """Mark the review helpful for `user_id`, or unmark it if already marked.

        Returns True when the user's mark is present afterwards.
        """
        now = datetime.now(UTC)
        existing = self.helpful_vote_from(user_id)

        with atomic_change(self):
            if existing is None:
                self.add_helpful_votes(HelpfulVote(user_id=user_id, marked_at=now))
            else:
                self.remove_helpful_votes(existing)
            self.helpful_count = len(self.helpful_votes)
            self.updated_at = now

        is_helpful = existing is None
        self.raise_(
            HelpfulMarkToggled(
                rating_id=str(self.id),
                user_id=str(user_id),
                is_helpful=is_helpful,
                helpful_count=self.helpful_count,
                toggled_at=now,
            )
        )
        return is_helpful

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def remove(self):
        """Record the author's deletion. The caller deletes the row from storage."""
        self.raise_(
            RatingRemoved(
                rating_id=str(self.id),
                cafe_id=str(self.cafe_id),
                user_id=str(self.user_id),
                rating=self.rating,
                removed_at=datetime.now(UTC),
            )
        )
