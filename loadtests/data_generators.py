"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's Pydantic request
schemas and the domain's validation rules (budget ordering, known
amenities, menu categories, review length).
"""

import random
import uuid

from faker import Faker

fake = Faker()

AMENITIES = ["wifi", "parking", "outdoor-seating", "live-music", "pet-friendly", "takeaway", "delivery"]
MENU_CATEGORIES = ["beverage", "food", "dessert", "snack"]
CITIES = ["Bengaluru", "Mumbai", "Pune", "Chennai", "Hyderabad"]


def user_id() -> str:
    """Generate user ids like 'user-lt-a1b2c3d4' for the X-User-Id header."""
    return f"user-lt-{uuid.uuid4().hex[:8]}"


def cafe_data() -> dict:
    """Generate a RegisterCafeRequest payload."""
    min_budget = round(random.uniform(100, 400), 2)
    return {
        "name": f"{fake.last_name()} Coffee House"[:120],
        "description": fake.paragraph(nb_sentences=3),
        "city": random.choice(CITIES),
        "address": fake.street_address()[:255],
        "state": fake.state()[:100],
        "zip_code": fake.zipcode()[:20],
        "phone": f"+91-{random.randint(7000000000, 9999999999)}",
        "email": fake.email(),
        "min_budget": min_budget,
        "max_budget": round(min_budget + random.uniform(50, 600), 2),
        "amenities": random.sample(AMENITIES, k=random.randint(0, 4)),
    }


def menu_item_data() -> dict:
    """Generate an AddMenuItemRequest payload."""
    return {
        "name": fake.word().title()[:120],
        "price": round(random.uniform(50, 500), 2),
        "category": random.choice(MENU_CATEGORIES),
        "description": fake.sentence()[:500],
    }


def rating_data(cafe_id: str) -> dict:
    """Generate a SubmitRatingRequest payload, sometimes with aspect scores."""
    payload = {
        "cafe_id": cafe_id,
        "rating": random.randint(1, 5),
        "review": fake.paragraph(nb_sentences=random.randint(1, 5))[:1000],
    }
    if random.random() < 0.5:
        payload["aspects"] = {
            aspect: random.randint(1, 5)
            for aspect in random.sample(["food", "service", "ambiance", "value"], k=random.randint(1, 4))
        }
    return payload
