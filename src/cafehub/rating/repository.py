"""Repository for the Rating aggregate — per-cafe and per-user queries."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from cafehub.domain import cafehub
from cafehub.rating.rating import HelpfulVote, Rating
from cafehub.shared.pagination import DEFAULT_PAGE_SIZE, Page, page_window

_SORT_ORDERS = {
    "newest": "-created_at",
    "oldest": "created_at",
    "highest": "-rating",
    "lowest": "rating",
    "helpful": "-helpful_count",
    "mostHelpful": "-helpful_count",
}

_BATCH_SIZE = 100


@cafehub.repository(part_of=Rating)
class RatingRepository:
    def list_for_cafe(self, cafe_id, sort_by="newest", page=1, page_size=DEFAULT_PAGE_SIZE):
        """One page of a cafe's ratings. Unknown sort keys fall back to newest first."""
        page, page_size, offset = page_window(page, page_size)

        results = (
            self._dao.query.filter(cafe_id=str(cafe_id))
            .order_by(_SORT_ORDERS.get(sort_by, _SORT_ORDERS["newest"]))
            .offset(offset)
            .limit(page_size)
            .all()
        )
        return Page(items=results.items, total=results.total, page=page, page_size=page_size)

    def list_for_user(self, user_id, page=1, page_size=DEFAULT_PAGE_SIZE):
        """One page of the ratings a user has left, newest first."""
        page, page_size, offset = page_window(page, page_size)

        results = (
            self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").offset(offset).limit(page_size).all()
        )
        return Page(items=results.items, total=results.total, page=page, page_size=page_size)

    def find_for(self, user_id, cafe_id) -> Rating | None:
        results = self._dao.query.filter(user_id=str(user_id), cafe_id=str(cafe_id)).all()
        return results.first

    def get_for_user_cafe(self, user_id, cafe_id) -> Rating:
        rating = self.find_for(user_id, cafe_id)
        if rating is None:
            raise ObjectNotFoundError("Rating not found")
        return rating

    def star_counts(self, cafe_id) -> dict[int, int]:
        """Number of the cafe's ratings at each star value, keyed 5 down to 1."""
        return {
            stars: self._dao.query.filter(cafe_id=str(cafe_id), rating=stars).all().total for stars in range(5, 0, -1)
        }

    def remove_all_for_cafe(self, cafe_id) -> int:
        """Delete every rating of a cafe, with their helpful marks. Returns how many were deleted.

        No rating events are raised.
        """
        ratings = self._collect(self._dao.query.filter(cafe_id=str(cafe_id)).order_by("created_at"))

        vote_dao = current_domain.repository_for(HelpfulVote)._dao
        for rating in ratings:
            for vote in list(rating.helpful_votes):
                vote_dao.delete(vote)
            self._dao.delete(rating)

        return len(ratings)

    def _collect(self, query):
        # Query results are capped per call; walk the whole result set in batches.
        collected = []
        offset = 0
        while True:
            batch = query.offset(offset).limit(_BATCH_SIZE).all()
            collected.extend(batch.items)
            offset += _BATCH_SIZE
            if offset >= batch.total or not batch.items:
                return collected
