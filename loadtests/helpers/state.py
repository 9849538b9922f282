"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own ids. The pool of contended cafes
is the only state shared between users.
"""

from dataclasses import dataclass, field


@dataclass
class OwnerState:
    """Tracks one simulated owner and the cafe they list."""

    user_id: str
    cafe_id: str | None = None
    menu_item_ids: list[str] = field(default_factory=list)


@dataclass
class RaterState:
    """Tracks one simulated visitor and the ratings they have left."""

    user_id: str
    rated: dict[str, str] = field(default_factory=dict)  # cafe_id -> rating_id


# Cafes many raters hit at once, so their summaries are recomputed under contention
HOT_CAFES: list[str] = []
