"""RemoveRating — the author deletes their rating.

The rating and its helpful marks are deleted from storage. `RatingRemoved`
is still dispatched so the cafe's summary is recomputed without it.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.domain import cafehub, logger
from cafehub.rating.rating import HelpfulVote, Rating
from cafehub.shared.errors import ForbiddenError


@cafehub.command(part_of="Rating")
class RemoveRating:
    rating_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@cafehub.command_handler(part_of=Rating)
class RemoveRatingHandler:
    @handle(RemoveRating)
    def remove_rating(self, command):
        repo = current_domain.repository_for(Rating)
        rating = repo.get(command.rating_id)

        if not rating.is_authored_by(command.requested_by):
            raise ForbiddenError("Not authorized to delete this rating")

        rating.remove()
        # Tracked by the unit of work so RatingRemoved is dispatched on commit
        repo.add(rating)

        vote_dao = current_domain.repository_for(HelpfulVote)._dao
        for vote in list(rating.helpful_votes):
            vote_dao.delete(vote)
        repo._dao.delete(rating)

        logger.info("Rating removed", rating_id=str(rating.id), cafe_id=str(rating.cafe_id))
