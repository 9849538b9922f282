"""ToggleHelpful — mark a review helpful, or take the mark back.

Any signed-in user may toggle, including the author. Toggles on the same
rating are serialized per rating within the process and commit before the
next one reads; across processes the aggregate's version rejects a stale
write with an expected-version conflict.
"""

from protean import UnitOfWork
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.domain import cafehub, logger
from cafehub.rating.rating import Rating
from cafehub.shared.locks import KeyedLock


@cafehub.command(part_of="Rating")
class ToggleHelpful:
    rating_id = Identifier(required=True)
    user_id = Identifier(required=True)


@cafehub.command_handler(part_of=Rating)
class ToggleHelpfulHandler:
    _locks = KeyedLock()

    @handle(ToggleHelpful)
    def toggle_helpful(self, command):
        with self._locks.hold(str(command.rating_id)), UnitOfWork():
            repo = current_domain.repository_for(Rating)
            rating = repo.get(command.rating_id)

            is_helpful = rating.toggle_helpful(command.user_id)
            repo.add(rating)

        logger.info(
            "Helpful mark toggled",
            rating_id=str(rating.id),
            user_id=str(command.user_id),
            is_helpful=is_helpful,
            helpful_count=rating.helpful_count,
        )
        return {"helpful_count": rating.helpful_count, "is_helpful": is_helpful}
