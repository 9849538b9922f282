"""Rating summary — keeps each cafe's average and count in step with its ratings.

The summary is always recomputed from the full rating set rather than
adjusted by the delta of the triggering event, so a missed or repeated
event cannot leave it drifting. Recomputation for one cafe is serialized:
the read of the rating set and the write of the cafe happen under a
per-cafe lock, inside a unit of work that commits before the lock is
released.

A failed recompute is logged and swallowed. The rating change that
triggered it has already been committed and stays in place.
"""

from decimal import ROUND_HALF_UP, Decimal

from protean import UnitOfWork
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cafehub.cafe.cafe import Cafe
from cafehub.domain import cafehub, logger
from cafehub.rating.events import RatingRemoved, RatingRevised, RatingSubmitted
from cafehub.rating.rating import Rating
from cafehub.shared.locks import KeyedLock

_ONE_PLACE = Decimal("0.1")
_WHOLE = Decimal("1")


def summarize(counts: dict[int, int]) -> tuple[float, int]:
    """Average (one decimal place, halves rounded up) and count for per-star counts."""
    total = sum(counts.values())
    if total == 0:
        return 0.0, 0

    weighted = sum(stars * count for stars, count in counts.items())
    average = (Decimal(weighted) / Decimal(total)).quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)
    return float(average), total


def _percentage(count: int, total: int) -> int:
    if not total:
        return 0
    return int((Decimal(count * 100) / Decimal(total)).quantize(_WHOLE, rounding=ROUND_HALF_UP))


def distribution(counts: dict[int, int]) -> dict[int, dict[str, int]]:
    """Per-star count and whole-number percentage of the total (halves rounded up), keyed 5 down to 1."""
    total = sum(counts.values())
    return {
        stars: {"count": counts.get(stars, 0), "percentage": _percentage(counts.get(stars, 0), total)}
        for stars in range(5, 0, -1)
    }


@cafehub.event_handler(part_of=Cafe, stream_category="cafehub::rating")
class RatingSummaryAggregator:
    """Recomputes a cafe's rating summary whenever its rating set changes."""

    _locks = KeyedLock()

    @handle(RatingSubmitted)
    def on_rating_submitted(self, event: RatingSubmitted) -> None:
        self.recompute(event.cafe_id)

    @handle(RatingRevised)
    def on_rating_revised(self, event: RatingRevised) -> None:
        self.recompute(event.cafe_id)

    @handle(RatingRemoved)
    def on_rating_removed(self, event: RatingRemoved) -> None:
        self.recompute(event.cafe_id)

    @classmethod
    def recompute(cls, cafe_id) -> tuple[float, int] | None:
        """Rewrite the cafe's summary from its current ratings.

        Returns the written ``(average, count)``, or None when nothing was written.
        """
        cafe_id = str(cafe_id)
        try:
            with cls._locks.hold(cafe_id), UnitOfWork():
                cafe_repo = current_domain.repository_for(Cafe)
                try:
                    cafe = cafe_repo.get(cafe_id)
                except ObjectNotFoundError:
                    logger.info("Rating summary skipped, cafe is gone", cafe_id=cafe_id)
                    return None

                counts = current_domain.repository_for(Rating).star_counts(cafe_id)
                average, count = summarize(counts)

                cafe.refresh_rating_summary(average, count)
                cafe_repo.add(cafe)
        except Exception:
            logger.exception("Rating summary recompute failed", cafe_id=cafe_id)
            return None

        logger.info("Rating summary refreshed", cafe_id=cafe_id, average=average, count=count)
        return average, count
