"""Pydantic request/response schemas for the CafeHub API.

These are separate from Protean commands: the API layer is the external
contract, commands are internal domain concepts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas: Ratings
# ---------------------------------------------------------------------------
class AspectScores(BaseModel):
    food: int | None = Field(default=None, ge=1, le=5)
    service: int | None = Field(default=None, ge=1, le=5)
    ambiance: int | None = Field(default=None, ge=1, le=5)
    value: int | None = Field(default=None, ge=1, le=5)


class SubmitRatingRequest(BaseModel):
    cafe_id: str
    rating: int = Field(ge=1, le=5)
    review: str = Field(min_length=1, max_length=1000)
    aspects: AspectScores | None = None


# ---------------------------------------------------------------------------
# Request Schemas: Cafes
# ---------------------------------------------------------------------------
class RegisterCafeRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: str = Field(min_length=1)
    city: str = Field(min_length=1, max_length=100)
    min_budget: float = Field(ge=0)
    max_budget: float = Field(ge=0)
    address: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    amenities: list[str] = []


class UpdateCafeRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    city: str | None = Field(default=None, min_length=1, max_length=100)
    min_budget: float | None = Field(default=None, ge=0)
    max_budget: float | None = Field(default=None, ge=0)
    address: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    amenities: list[str] | None = None


class AddMenuItemRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    price: float = Field(ge=0)
    category: str
    description: str | None = None
    image_url: str | None = None


class UpdateMenuItemRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    price: float | None = Field(default=None, ge=0)
    category: str | None = None
    description: str | None = None
    image_url: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class CafeIdResponse(BaseModel):
    cafe_id: str


class MenuItemIdResponse(BaseModel):
    item_id: str


class CafeDeletedResponse(BaseModel):
    status: str = "deleted"
    ratings_removed: int


class RatingResponse(BaseModel):
    rating_id: str
    cafe_id: str
    user_id: str
    rating: int
    review: str
    aspects: AspectScores | None = None
    helpful_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None


class RatingPagination(BaseModel):
    current_page: int
    total_pages: int
    total_ratings: int
    has_next: bool
    has_prev: bool


class StarBucket(BaseModel):
    rating: int
    count: int
    percentage: int


class RatingSummary(BaseModel):
    average_rating: float
    total_ratings: int
    distribution: list[StarBucket]


class CafeRatingsResponse(BaseModel):
    ratings: list[RatingResponse]
    pagination: RatingPagination
    summary: RatingSummary


class UserRatingsResponse(BaseModel):
    ratings: list[RatingResponse]
    pagination: RatingPagination


class HelpfulToggleResponse(BaseModel):
    helpful_count: int
    is_helpful: bool


class MenuItemResponse(BaseModel):
    item_id: str
    name: str
    description: str | None = None
    price: float
    category: str
    image_url: str | None = None


class CafeResponse(BaseModel):
    cafe_id: str
    owner_id: str
    name: str
    description: str
    address: str | None = None
    city: str
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    min_budget: float
    max_budget: float
    amenities: list[str] = []
    menu: list[MenuItemResponse] = []
    is_active: bool
    rating_average: float
    rating_count: int
    created_at: str | None = None


class CafePagination(BaseModel):
    current_page: int
    total_pages: int
    total_cafes: int
    has_next: bool
    has_prev: bool


class CafeListResponse(BaseModel):
    cafes: list[CafeResponse]
    pagination: CafePagination
