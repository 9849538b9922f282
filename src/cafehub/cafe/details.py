"""UpdateCafeDetails — the owner edits a cafe's listing.

Only supplied fields change. The rating summary is not part of the
command: it is derived from ratings and never client-supplied.
"""

import json

from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.cafe.cafe import Cafe
from cafehub.domain import cafehub


@cafehub.command(part_of="Cafe")
class UpdateCafeDetails:
    cafe_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    name = String(max_length=120)
    description = Text()
    address = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    phone = String(max_length=30)
    email = String(max_length=254)
    website = String(max_length=500)
    min_budget = Float(min_value=0.0)
    max_budget = Float(min_value=0.0)
    amenities = Text()  # JSON array of amenity names


_DETAIL_FIELDS = (
    "name",
    "description",
    "address",
    "city",
    "state",
    "zip_code",
    "phone",
    "email",
    "website",
    "min_budget",
    "max_budget",
)


@cafehub.command_handler(part_of=Cafe)
class UpdateCafeDetailsHandler:
    @handle(UpdateCafeDetails)
    def update_cafe_details(self, command):
        repo = current_domain.repository_for(Cafe)
        cafe = repo.get(command.cafe_id)
        cafe.assert_owned_by(command.requested_by, action="update")

        kwargs = {name: getattr(command, name) for name in _DETAIL_FIELDS if getattr(command, name) is not None}
        if command.amenities is not None:
            kwargs["amenities"] = json.loads(command.amenities)

        cafe.update_details(**kwargs)
        repo.add(cafe)
