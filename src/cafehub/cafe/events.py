"""Domain events for the Cafe aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from cafehub.domain import cafehub


@cafehub.event(part_of="Cafe")
class CafeRegistered:
    """An owner listed a new cafe."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)
    city = String(required=True)
    registered_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class CafeDetailsUpdated:
    """The owner changed the cafe's listing details."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    name = String(required=True)
    city = String(required=True)
    updated_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class CafeDeactivated:
    """The cafe was hidden from listings and stopped accepting ratings."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class CafeReactivated:
    """A deactivated cafe was listed again."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    reactivated_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class MenuItemAdded:
    """A dish or drink was added to the cafe's menu."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    item_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String(required=True)
    added_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class MenuItemUpdated:
    __version__ = 1

    cafe_id = Identifier(required=True)
    item_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    category = String(required=True)
    updated_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class MenuItemRemoved:
    """A menu item was taken off the menu."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    item_id = Identifier(required=True)
    removed_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class RatingSummaryRefreshed:
    """The cafe's rating summary was recomputed from its ratings."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    average = Float(required=True)
    count = Integer(required=True)
    refreshed_at = DateTime(required=True)


@cafehub.event(part_of="Cafe")
class CafeDeleted:
    """The owner deleted the cafe; its ratings were deleted with it."""

    __version__ = 1

    cafe_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    ratings_removed = Integer(required=True)
    deleted_at = DateTime(required=True)
