"""RegisterCafe — an owner lists a new cafe."""

import json

from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.cafe.cafe import Cafe
from cafehub.domain import cafehub, logger


@cafehub.command(part_of="Cafe")
class RegisterCafe:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=120)
    description = Text(required=True)
    city = String(required=True, max_length=100)
    min_budget = Float(required=True, min_value=0.0)
    max_budget = Float(required=True, min_value=0.0)
    address = String(max_length=255)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    phone = String(max_length=30)
    email = String(max_length=254)
    website = String(max_length=500)
    amenities = Text()  # JSON array of amenity names


@cafehub.command_handler(part_of=Cafe)
class RegisterCafeHandler:
    @handle(RegisterCafe)
    def register_cafe(self, command):
        cafe = Cafe.register(
            owner_id=command.owner_id,
            name=command.name,
            description=command.description,
            city=command.city,
            min_budget=command.min_budget,
            max_budget=command.max_budget,
            address=command.address,
            state=command.state,
            zip_code=command.zip_code,
            phone=command.phone,
            email=command.email,
            website=command.website,
            amenities=json.loads(command.amenities) if command.amenities else None,
        )
        current_domain.repository_for(Cafe).add(cafe)

        logger.info("Cafe registered", cafe_id=str(cafe.id), owner_id=str(cafe.owner_id))
        return str(cafe.id)
