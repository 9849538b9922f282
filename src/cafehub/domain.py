"""CafeHub bounded context — Cafes, Ratings and rating aggregation.

Owners list cafes and their menus; visitors leave one star rating with a
written review per cafe and mark other reviews as helpful. Every change to
a cafe's rating set is followed by a full recomputation of the cafe's
rating summary.
"""

from protean.domain import Domain

from cafehub.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

cafehub = Domain(name="cafehub")
