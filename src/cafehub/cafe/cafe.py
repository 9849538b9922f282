"""Cafe aggregate — a listed venue, its menu, and its rating summary.

The rating summary (`rating_average`, `rating_count`) is a denormalized
cache of the cafe's Rating set. Only the rating summary aggregator writes
it, through `refresh_rating_summary()`; no command carries client-supplied
values for it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from cafehub.cafe.events import (
    CafeDeactivated,
    CafeDeleted,
    CafeDetailsUpdated,
    CafeReactivated,
    CafeRegistered,
    MenuItemAdded,
    MenuItemRemoved,
    MenuItemUpdated,
    RatingSummaryRefreshed,
)
from cafehub.domain import cafehub
from cafehub.shared.errors import ForbiddenError

_UNSET = object()


class Amenity(Enum):
    WIFI = "wifi"
    PARKING = "parking"
    OUTDOOR_SEATING = "outdoor-seating"
    LIVE_MUSIC = "live-music"
    PET_FRIENDLY = "pet-friendly"
    TAKEAWAY = "takeaway"
    DELIVERY = "delivery"


class MenuCategory(Enum):
    BEVERAGE = "beverage"
    FOOD = "food"
    DESSERT = "dessert"
    SNACK = "snack"


def _encode_amenities(amenities):
    amenities = list(dict.fromkeys(amenities or []))
    known = {a.value for a in Amenity}
    unknown = [a for a in amenities if a not in known]
    if unknown:
        raise ValidationError({"amenities": [f"Unknown amenities: {', '.join(unknown)}"]})
    return json.dumps(amenities)


@cafehub.entity(part_of="Cafe")
class MenuItem:
    name = String(required=True, max_length=120)
    description = String(max_length=500, default="")
    price = Float(required=True, min_value=0.0)
    category = String(choices=MenuCategory, required=True)
    image_url = String(max_length=500)


@cafehub.aggregate
class Cafe:
    owner_id = Identifier(required=True)

    name = String(required=True, max_length=120)
    description = Text(required=True)

    # Location
    address = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)

    # Contact
    phone = String(max_length=30)
    email = String(max_length=254)
    website = String(max_length=500, default="")

    # Average spend per visitor
    min_budget = Float(required=True, min_value=0.0)
    max_budget = Float(required=True, min_value=0.0)

    amenities = Text()  # JSON array of Amenity values
    menu = HasMany(MenuItem)

    is_active = Boolean(default=True)

    # Rating summary, written only by the rating summary aggregator
    rating_average = Float(default=0.0, min_value=0.0, max_value=5.0)
    rating_count = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def budget_range_must_be_ordered(self):
        if self.min_budget is not None and self.max_budget is not None and self.min_budget > self.max_budget:
            raise ValidationError({"max_budget": ["Maximum budget cannot be lower than minimum budget"]})

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Cafe name cannot be empty"]})

    @invariant.post
    def empty_summary_has_no_average(self):
        if self.rating_count == 0 and self.rating_average:
            raise ValidationError({"rating_average": ["A cafe without ratings has an average of 0"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(
        cls,
        owner_id,
        name,
        description,
        city,
        min_budget,
        max_budget,
        address=None,
        state=None,
        zip_code=None,
        phone=None,
        email=None,
        website=None,
        amenities=None,
    ):
        now = datetime.now(UTC)

        cafe = cls(
            owner_id=owner_id,
            name=name.strip() if name else name,
            description=description,
            address=address,
            city=city.strip() if city else city,
            state=state,
            zip_code=zip_code,
            phone=phone,
            email=email,
            website=website or "",
            min_budget=min_budget,
            max_budget=max_budget,
            amenities=_encode_amenities(amenities),
            is_active=True,
            rating_average=0.0,
            rating_count=0,
            created_at=now,
            updated_at=now,
        )

        cafe.raise_(
            CafeRegistered(
                cafe_id=str(cafe.id),
                owner_id=str(owner_id),
                name=cafe.name,
                city=cafe.city,
                registered_at=now,
            )
        )

        return cafe

    # -------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id):
        return str(self.owner_id) == str(user_id)

    def assert_owned_by(self, user_id, action="change"):
        if not self.is_owned_by(user_id):
            raise ForbiddenError(f"Not authorized to {action} this cafe")

    @property
    def amenity_list(self):
        return json.loads(self.amenities) if self.amenities else []

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        address=_UNSET,
        city=_UNSET,
        state=_UNSET,
        zip_code=_UNSET,
        phone=_UNSET,
        email=_UNSET,
        website=_UNSET,
        min_budget=_UNSET,
        max_budget=_UNSET,
        amenities=_UNSET,
    ):
        """Overwrite the supplied listing fields, leaving the rest untouched."""
        changes = {
            "name": name,
            "description": description,
            "address": address,
            "city": city,
            "state": state,
            "zip_code": zip_code,
            "phone": phone,
            "email": email,
            "website": website,
            "min_budget": min_budget,
            "max_budget": max_budget,
        }
        now = datetime.now(UTC)

        with atomic_change(self):
            for field_name, value in changes.items():
                if value is not _UNSET:
                    setattr(self, field_name, value.strip() if field_name in ("name", "city") and value else value)
            if amenities is not _UNSET:
                self.amenities = _encode_amenities(amenities)
            self.updated_at = now

        self.raise_(
            CafeDetailsUpdated(
                cafe_id=str(self.id),
                name=self.name,
                city=self.city,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Cafe is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now

        self.raise_(CafeDeactivated(cafe_id=str(self.id), deactivated_at=now))

    def reactivate(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Cafe is already active"]})

        now = datetime.now(UTC)
        self.is_active = True
        self.updated_at = now

        self.raise_(CafeReactivated(cafe_id=str(self.id), reactivated_at=now))

    def mark_deleted(self, ratings_removed):
        """Record the deletion. The caller removes the cafe and its ratings from storage."""
        self.raise_(
            CafeDeleted(
                cafe_id=str(self.id),
                owner_id=str(self.owner_id),
                ratings_removed=ratings_removed,
                deleted_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Menu
    # -------------------------------------------------------------------
    def add_menu_item(self, name, price, category, description=None, image_url=None):
        now = datetime.now(UTC)

        item = MenuItem(
            name=name,
            description=description or "",
            price=price,
            category=category,
            image_url=image_url,
        )
        self.add_menu(item)
        self.updated_at = now

        self.raise_(
            MenuItemAdded(
                cafe_id=str(self.id),
                item_id=str(item.id),
                name=item.name,
                price=item.price,
                category=item.category,
                added_at=now,
            )
        )
        return item

    def _menu_item(self, item_id):
        item = next((i for i in self.menu if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Menu item {item_id} not found")
        return item

    def update_menu_item(
        self,
        item_id,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        category=_UNSET,
        image_url=_UNSET,
    ):
        """Overwrite the supplied fields of one menu item."""
        item = self._menu_item(item_id)
        changes = {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "image_url": image_url,
        }
        now = datetime.now(UTC)

        for field_name, value in changes.items():
            if value is not _UNSET:
                setattr(item, field_name, value)
        self.updated_at = now

        self.raise_(
            MenuItemUpdated(
                cafe_id=str(self.id),
                item_id=str(item.id),
                name=item.name,
                price=item.price,
                category=item.category,
                updated_at=now,
            )
        )
        return item

    def remove_menu_item(self, item_id):
        item = self._menu_item(item_id)

        now = datetime.now(UTC)
        self.remove_menu(item)
        self.updated_at = now

        self.raise_(MenuItemRemoved(cafe_id=str(self.id), item_id=str(item_id), removed_at=now))

    # -------------------------------------------------------------------
    # Rating summary
    # -------------------------------------------------------------------
    def refresh_rating_summary(self, average, count):
        now = datetime.now(UTC)

        with atomic_change(self):
            self.rating_average = average
            self.rating_count = count
            self.updated_at = now

        self.raise_(
            RatingSummaryRefreshed(
                cafe_id=str(self.id),
                average=average,
                count=count,
                refreshed_at=now,
            )
        )
