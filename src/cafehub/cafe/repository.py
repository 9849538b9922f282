"""Repository for the Cafe aggregate — listing queries.

Text filters (city, state, search) match case-insensitive substrings. The
budget filters keep cafes whose whole budget range falls within the
requested bounds, and `amenities` keeps cafes offering any of the listed
amenities.
"""

from functools import reduce
from operator import or_

from protean import Q

from cafehub.cafe.cafe import Cafe
from cafehub.domain import cafehub
from cafehub.shared.pagination import DEFAULT_PAGE_SIZE, Page, page_window

_SORT_ORDERS = {
    "rating": "-rating_average",
    "newest": "-created_at",
    "budget-low": "min_budget",
    "budget-high": "-max_budget",
}

_SEARCHED_FIELDS = ("name", "description", "city")


def _any_of(*conditions):
    return reduce(or_, conditions)


@cafehub.repository(part_of=Cafe)
class CafeRepository:
    def list_active(
        self,
        city=None,
        state=None,
        min_budget=None,
        max_budget=None,
        amenities=None,
        search=None,
        sort_by="rating",
        page=1,
        page_size=DEFAULT_PAGE_SIZE,
    ):
        """One page of active cafes matching every supplied filter."""
        page, page_size, offset = page_window(page, page_size)

        query = self._dao.query.filter(is_active=True)
        if city and city.strip():
            query = query.filter(city__icontains=city.strip())
        if state and state.strip():
            query = query.filter(state__icontains=state.strip())
        if min_budget is not None:
            query = query.filter(min_budget__gte=float(min_budget))
        if max_budget is not None:
            query = query.filter(max_budget__lte=float(max_budget))
        if amenities:
            # Stored as a JSON array, so each value appears quoted
            query = query.filter(_any_of(*(Q(amenities__contains=f'"{a}"') for a in amenities)))
        if search and search.strip():
            term = search.strip()
            query = query.filter(_any_of(*(Q(**{f"{f}__icontains": term}) for f in _SEARCHED_FIELDS)))

        results = (
            query.order_by(_SORT_ORDERS.get(sort_by, _SORT_ORDERS["rating"])).offset(offset).limit(page_size).all()
        )
        return Page(items=results.items, total=results.total, page=page, page_size=page_size)

    def owned_by(self, owner_id):
        """Every cafe of an owner, active or not, newest first."""
        return self._dao.query.filter(owner_id=str(owner_id)).order_by("-created_at").all().items
