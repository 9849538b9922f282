"""Menu management — the owner adds, edits and removes menu items."""

from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.cafe.cafe import Cafe
from cafehub.domain import cafehub


@cafehub.command(part_of="Cafe")
class AddMenuItem:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    name = String(required=True, max_length=120)
    price = Float(required=True, min_value=0.0)
    category = String(required=True)
    description = String(max_length=500)
    image_url = String(max_length=500)


@cafehub.command(part_of="Cafe")
class UpdateMenuItem:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    item_id = Identifier(required=True)
    name = String(max_length=120)
    price = Float(min_value=0.0)
    category = String()
    description = String(max_length=500)
    image_url = String(max_length=500)


@cafehub.command(part_of="Cafe")
class RemoveMenuItem:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    item_id = Identifier(required=True)


_MENU_ITEM_FIELDS = ("name", "price", "category", "description", "image_url")


@cafehub.command_handler(part_of=Cafe)
class ManageMenuHandler:
    @handle(AddMenuItem)
    def add_menu_item(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="update")

        item = cafe.add_menu_item(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            image_url=command.image_url,
        )
        repo.add(cafe)
        return str(item.id)

    @handle(UpdateMenuItem)
    def update_menu_item(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="update")

        changes = {name: getattr(command, name) for name in _MENU_ITEM_FIELDS if getattr(command, name) is not None}
        cafe.update_menu_item(command.item_id, **changes)
        repo.add(cafe)

    @handle(RemoveMenuItem)
    def remove_menu_item(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="update")

        cafe.remove_menu_item(command.item_id)
        repo.add(cafe)
