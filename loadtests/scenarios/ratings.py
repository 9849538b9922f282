"""CafeHub load test scenarios.

OwnerJourney lists a cafe step by step and feeds it into the shared pool
of hot cafes. RaterUser hammers that pool with submissions, revisions and
helpful toggles, so each hot cafe's rating summary is recomputed by many
concurrent requests.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import AMENITIES, CITIES, cafe_data, menu_item_data, rating_data, user_id
from loadtests.helpers.state import HOT_CAFES, OwnerState, RaterState

HOT_CAFE_POOL_SIZE = 5


class OwnerJourney(SequentialTaskSet):
    """Register Cafe -> Add Menu Items -> View.

    Generates 3 events: CafeRegistered, MenuItemAdded (x2).
    """

    def on_start(self):
        self.state = OwnerState(user_id=user_id())

    def _headers(self):
        return {"X-User-Id": self.state.user_id}

    @task
    def register_cafe(self):
        with self.client.post(
            "/cafes",
            json=cafe_data(),
            headers=self._headers(),
            catch_response=True,
            name="POST /cafes",
        ) as resp:
            if resp.status_code == 201:
                self.state.cafe_id = resp.json()["cafe_id"]
                if len(HOT_CAFES) < HOT_CAFE_POOL_SIZE:
                    HOT_CAFES.append(self.state.cafe_id)
            else:
                resp.failure(f"Register cafe failed: {resp.status_code}")
                self.interrupt()

    @task
    def add_drink(self):
        self._add_menu_item()

    @task
    def add_dish(self):
        self._add_menu_item()

    def _add_menu_item(self):
        with self.client.post(
            f"/cafes/{self.state.cafe_id}/menu",
            json=menu_item_data(),
            headers=self._headers(),
            catch_response=True,
            name="POST /cafes/{id}/menu",
        ) as resp:
            if resp.status_code == 201:
                self.state.menu_item_ids.append(resp.json()["item_id"])
            else:
                resp.failure(f"Add menu item failed: {resp.status_code}")

    @task
    def view_cafe(self):
        self.client.get(f"/cafes/{self.state.cafe_id}", name="GET /cafes/{id}")

    @task
    def done(self):
        self.interrupt()


class OwnerUser(HttpUser):
    """Locust user listing cafes."""

    wait_time = between(1.0, 3.0)
    tasks = [OwnerJourney]


class RaterUser(HttpUser):
    """Locust user rating the hot cafes.

    Weighted distribution:
    - 50% submit or revise a rating (RatingSubmitted / RatingRevised)
    - 30% browse a cafe's ratings and summary
    - 20% toggle a helpful mark
    """

    wait_time = between(0.2, 1.0)

    def on_start(self):
        self.state = RaterState(user_id=user_id())

    def _headers(self):
        return {"X-User-Id": self.state.user_id}

    def _hot_cafe(self):
        return random.choice(HOT_CAFES) if HOT_CAFES else None

    @task(5)
    def rate(self):
        cafe_id = self._hot_cafe()
        if cafe_id is None:
            return

        with self.client.post(
            "/ratings",
            json=rating_data(cafe_id),
            headers=self._headers(),
            catch_response=True,
            name="POST /ratings",
        ) as resp:
            if resp.status_code in (200, 201):
                self.state.rated[cafe_id] = resp.json()["rating_id"]
            else:
                resp.failure(f"Submit rating failed: {resp.status_code}")

    @task(3)
    def browse(self):
        cafe_id = self._hot_cafe()
        if cafe_id is None:
            return

        self.client.get(
            f"/ratings/cafe/{cafe_id}",
            params={"sort_by": random.choice(["newest", "highest", "lowest", "mostHelpful"])},
            name="GET /ratings/cafe/{id}",
        )

    @task(2)
    def search_cafes(self):
        params = {"sort_by": random.choice(["rating", "newest", "budget-low", "budget-high"])}
        if random.random() < 0.5:
            params["city"] = random.choice(CITIES)
        if random.random() < 0.3:
            params["amenities"] = ",".join(random.sample(AMENITIES, k=2))
        if random.random() < 0.3:
            params["max_budget"] = random.choice([300, 600, 1000])
        self.client.get("/cafes", params=params, name="GET /cafes")

    @task(2)
    def toggle_helpful(self):
        cafe_id = self._hot_cafe()
        if cafe_id is None:
            return

        resp = self.client.get(f"/ratings/cafe/{cafe_id}", name="GET /ratings/cafe/{id}")
        if resp.status_code != 200 or not resp.json()["ratings"]:
            return

        rating_id = random.choice(resp.json()["ratings"])["rating_id"]
        with self.client.post(
            f"/ratings/{rating_id}/helpful",
            headers=self._headers(),
            catch_response=True,
            name="POST /ratings/{id}/helpful",
        ) as toggle:
            # 409 is an expected-version conflict under contention, not an error
            if toggle.status_code in (200, 409):
                toggle.success()
            else:
                toggle.failure(f"Toggle helpful failed: {toggle.status_code}")
