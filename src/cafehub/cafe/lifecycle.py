"""Cafe lifecycle — deactivate, reactivate and delete.

Deleting a cafe deletes all of its ratings in the same unit of work. The
ratings are removed directly from storage without raising rating events,
so the rating summary aggregator is not triggered for a cafe that no
longer exists.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.cafe.cafe import Cafe, MenuItem
from cafehub.domain import cafehub, logger
from cafehub.rating.rating import Rating


@cafehub.command(part_of="Cafe")
class DeactivateCafe:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@cafehub.command(part_of="Cafe")
class ReactivateCafe:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@cafehub.command(part_of="Cafe")
class DeleteCafe:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@cafehub.command_handler(part_of=Cafe)
class CafeLifecycleHandler:
    @handle(DeactivateCafe)
    def deactivate_cafe(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="deactivate")

        cafe.deactivate()
        repo.add(cafe)

    @handle(ReactivateCafe)
    def reactivate_cafe(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="reactivate")

        cafe.reactivate()
        repo.add(cafe)

    @handle(DeleteCafe)
    def delete_cafe(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="delete")

        ratings_removed = current_domain.repository_for(Rating).remove_all_for_cafe(cafe.id)

        cafe.mark_deleted(ratings_removed)
        # Tracked by the unit of work so CafeDeleted is dispatched on commit
        repo.add(cafe)

        menu_dao = current_domain.repository_for(MenuItem)._dao
        for item in list(cafe.menu):
            menu_dao.delete(item)
        repo._dao.delete(cafe)

        logger.info("Cafe deleted", cafe_id=str(cafe.id), ratings_removed=ratings_removed)
        return ratings_removed
