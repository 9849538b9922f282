"""SubmitRating — rate a cafe, or revise the rating already left for it.

A user has at most one rating per cafe. The handler looks the pair up
first and revises in place when found. A new rating carries the pair's
unique key, so a racing second first-submission is rejected by the store.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.cafe.cafe import Cafe
from cafehub.domain import cafehub, logger
from cafehub.rating.rating import ASPECT_NAMES, MAX_REVIEW_LENGTH, Rating


@cafehub.command(part_of="Rating")
class SubmitRating:
    user_id = Identifier(required=True)
    cafe_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    review = String(required=True, max_length=MAX_REVIEW_LENGTH)

    # Optional aspect scores
    food = Integer(min_value=1, max_value=5)
    service = Integer(min_value=1, max_value=5)
    ambiance = Integer(min_value=1, max_value=5)
    value = Integer(min_value=1, max_value=5)


@cafehub.command_handler(part_of=Rating)
class SubmitRatingHandler:
    @handle(SubmitRating)
    def submit_rating(self, command):
        cafe = current_domain.repository_for(Cafe).get(command.cafe_id)
        if not cafe.is_active:
            raise ObjectNotFoundError("Cafe not found")

        aspects = {name: getattr(command, name) for name in ASPECT_NAMES}

        repo = current_domain.repository_for(Rating)
        rating = repo.find_for(command.user_id, command.cafe_id)
        created = rating is None

        if created:
            rating = Rating.submit(
                user_id=command.user_id,
                cafe_id=command.cafe_id,
                rating=command.rating,
                review=command.review,
                aspects=aspects,
            )
        else:
            rating.revise(rating=command.rating, review=command.review, aspects=aspects)

        repo.add(rating)

        logger.info(
            "Rating submitted" if created else "Rating revised",
            rating_id=str(rating.id),
            cafe_id=str(command.cafe_id),
            user_id=str(command.user_id),
            stars=command.rating,
        )
        return {"rating_id": str(rating.id), "created": created}
