"""FastAPI routes for CafeHub — cafes and their ratings.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Reads go straight to the
repositories.
"""

import json

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from cafehub.api.auth import require_user
from cafehub.api.schemas import (
    AddMenuItemRequest,
    AspectScores,
    CafeDeletedResponse,
    CafeIdResponse,
    CafeListResponse,
    CafePagination,
    CafeRatingsResponse,
    CafeResponse,
    HelpfulToggleResponse,
    MenuItemIdResponse,
    MenuItemResponse,
    RatingPagination,
    RatingResponse,
    RatingSummary,
    RegisterCafeRequest,
    StarBucket,
    StatusResponse,
    SubmitRatingRequest,
    UpdateCafeRequest,
    UpdateMenuItemRequest,
    UserRatingsResponse,
)
from cafehub.cafe.cafe import Cafe
from cafehub.cafe.details import UpdateCafeDetails
from cafehub.cafe.lifecycle import DeactivateCafe, DeleteCafe, ReactivateCafe
from cafehub.cafe.menu import AddMenuItem, RemoveMenuItem, UpdateMenuItem
from cafehub.cafe.registration import RegisterCafe
from cafehub.rating.helpful import ToggleHelpful
from cafehub.rating.rating import ASPECT_NAMES, Rating
from cafehub.rating.removal import RemoveRating
from cafehub.rating.submission import SubmitRating
from cafehub.rating.summary import distribution, summarize
from cafehub.shared.pagination import DEFAULT_PAGE_SIZE

rating_router = APIRouter(prefix="/ratings", tags=["ratings"])
cafe_router = APIRouter(prefix="/cafes", tags=["cafes"])


def _timestamp(value):
    return value.isoformat() if value else None


def _rating_response(rating: Rating) -> RatingResponse:
    aspects = rating.aspects
    return RatingResponse(
        rating_id=str(rating.id),
        cafe_id=str(rating.cafe_id),
        user_id=str(rating.user_id),
        rating=rating.rating,
        review=rating.review,
        aspects=AspectScores(**{name: getattr(aspects, name) for name in ASPECT_NAMES}) if aspects else None,
        helpful_count=rating.helpful_count or 0,
        created_at=_timestamp(rating.created_at),
        updated_at=_timestamp(rating.updated_at),
    )


def _rating_pagination(page) -> RatingPagination:
    return RatingPagination(
        current_page=page.page,
        total_pages=page.total_pages,
        total_ratings=page.total,
        has_next=page.has_next,
        has_prev=page.has_prev,
    )


def _cafe_response(cafe: Cafe) -> CafeResponse:
    return CafeResponse(
        cafe_id=str(cafe.id),
        owner_id=str(cafe.owner_id),
        name=cafe.name,
        description=cafe.description,
        address=cafe.address,
        city=cafe.city,
        state=cafe.state,
        zip_code=cafe.zip_code,
        phone=cafe.phone,
        email=cafe.email,
        website=cafe.website,
        min_budget=cafe.min_budget,
        max_budget=cafe.max_budget,
        amenities=cafe.amenity_list,
        menu=[
            MenuItemResponse(
                item_id=str(item.id),
                name=item.name,
                description=item.description,
                price=item.price,
                category=item.category,
                image_url=item.image_url,
            )
            for item in cafe.menu
        ],
        is_active=cafe.is_active,
        rating_average=cafe.rating_average or 0.0,
        rating_count=cafe.rating_count or 0,
        created_at=_timestamp(cafe.created_at),
    )


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------
@rating_router.post("", status_code=201, response_model=RatingResponse)
async def submit_rating(
    body: SubmitRatingRequest,
    response: Response,
    user_id: str = Depends(require_user),
) -> RatingResponse:
    """Rate a cafe. A second submission for the same cafe revises the first."""
    aspects = body.aspects.model_dump() if body.aspects else {}
    command = SubmitRating(
        user_id=user_id,
        cafe_id=body.cafe_id,
        rating=body.rating,
        review=body.review,
        **{name: aspects.get(name) for name in ASPECT_NAMES},
    )
    result = current_domain.process(command, asynchronous=False)
    if not result["created"]:
        response.status_code = 200

    rating = current_domain.repository_for(Rating).get(result["rating_id"])
    return _rating_response(rating)


@rating_router.get("/cafe/{cafe_id}", response_model=CafeRatingsResponse)
async def list_cafe_ratings(
    cafe_id: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort_by: str = "newest",
) -> CafeRatingsResponse:
    """A page of a cafe's ratings, with the star distribution over all of them."""
    current_domain.repository_for(Cafe).get(cafe_id)

    repo = current_domain.repository_for(Rating)
    results = repo.list_for_cafe(cafe_id, sort_by=sort_by, page=page, page_size=limit)

    counts = repo.star_counts(cafe_id)
    average, total = summarize(counts)

    return CafeRatingsResponse(
        ratings=[_rating_response(r) for r in results.items],
        pagination=_rating_pagination(results),
        summary=RatingSummary(
            average_rating=average,
            total_ratings=total,
            distribution=[
                StarBucket(rating=stars, count=bucket["count"], percentage=bucket["percentage"])
                for stars, bucket in distribution(counts).items()
            ],
        ),
    )


@rating_router.get("/user/{cafe_id}", response_model=RatingResponse)
async def get_my_rating_for_cafe(cafe_id: str, user_id: str = Depends(require_user)) -> RatingResponse:
    """The caller's rating of a cafe."""
    rating = current_domain.repository_for(Rating).get_for_user_cafe(user_id, cafe_id)
    return _rating_response(rating)


@rating_router.get("/user", response_model=UserRatingsResponse)
async def list_my_ratings(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    user_id: str = Depends(require_user),
) -> UserRatingsResponse:
    """Every rating the caller has left, newest first."""
    results = current_domain.repository_for(Rating).list_for_user(user_id, page=page, page_size=limit)
    return UserRatingsResponse(
        ratings=[_rating_response(r) for r in results.items],
        pagination=_rating_pagination(results),
    )


@rating_router.delete("/{rating_id}", response_model=StatusResponse)
async def remove_rating(rating_id: str, user_id: str = Depends(require_user)) -> StatusResponse:
    """Delete the caller's own rating."""
    current_domain.process(RemoveRating(rating_id=rating_id, requested_by=user_id), asynchronous=False)
    return StatusResponse(status="deleted")


@rating_router.post("/{rating_id}/helpful", response_model=HelpfulToggleResponse)
async def toggle_helpful(rating_id: str, user_id: str = Depends(require_user)) -> HelpfulToggleResponse:
    """Mark a review helpful, or unmark it."""
    result = current_domain.process(ToggleHelpful(rating_id=rating_id, user_id=user_id), asynchronous=False)
    return HelpfulToggleResponse(**result)


# ---------------------------------------------------------------------------
# Cafes
# ---------------------------------------------------------------------------
@cafe_router.post("", status_code=201, response_model=CafeIdResponse)
async def register_cafe(body: RegisterCafeRequest, user_id: str = Depends(require_user)) -> CafeIdResponse:
    """List a new cafe owned by the caller."""
    command = RegisterCafe(
        owner_id=user_id,
        name=body.name,
        description=body.description,
        city=body.city,
        min_budget=body.min_budget,
        max_budget=body.max_budget,
        address=body.address,
        state=body.state,
        zip_code=body.zip_code,
        phone=body.phone,
        email=body.email,
        website=body.website,
        amenities=json.dumps(body.amenities),
    )
    cafe_id = current_domain.process(command, asynchronous=False)
    return CafeIdResponse(cafe_id=cafe_id)


@cafe_router.get("", response_model=CafeListResponse)
async def list_cafes(
    city: str | None = None,
    state: str | None = None,
    min_budget: float | None = None,
    max_budget: float | None = None,
    amenities: str | None = None,
    search: str | None = None,
    sort_by: str = "rating",
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> CafeListResponse:
    """Active cafes matching the filters. `amenities` is comma-separated; any one of them matches."""
    results = current_domain.repository_for(Cafe).list_active(
        city=city,
        state=state,
        min_budget=min_budget,
        max_budget=max_budget,
        amenities=[a.strip() for a in amenities.split(",") if a.strip()] if amenities else None,
        search=search,
        sort_by=sort_by,
        page=page,
        page_size=limit,
    )
    return CafeListResponse(
        cafes=[_cafe_response(c) for c in results.items],
        pagination=CafePagination(
            current_page=results.page,
            total_pages=results.total_pages,
            total_cafes=results.total,
            has_next=results.has_next,
            has_prev=results.has_prev,
        ),
    )


@cafe_router.get("/owner/mine", response_model=list[CafeResponse])
async def list_my_cafes(user_id: str = Depends(require_user)) -> list[CafeResponse]:
    """Every cafe the caller owns, including deactivated ones."""
    return [_cafe_response(c) for c in current_domain.repository_for(Cafe).owned_by(user_id)]


@cafe_router.get("/{cafe_id}", response_model=CafeResponse)
async def get_cafe(cafe_id: str) -> CafeResponse:
    return _cafe_response(current_domain.repository_for(Cafe).get(cafe_id))


@cafe_router.put("/{cafe_id}", response_model=StatusResponse)
async def update_cafe(cafe_id: str, body: UpdateCafeRequest, user_id: str = Depends(require_user)) -> StatusResponse:
    """Edit the listing details of an owned cafe."""
    fields = body.model_dump(exclude_none=True, exclude={"amenities"})
    command = UpdateCafeDetails(
        cafe_id=cafe_id,
        requested_by=user_id,
        amenities=json.dumps(body.amenities) if body.amenities is not None else None,
        **fields,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cafe_router.put("/{cafe_id}/deactivate", response_model=StatusResponse)
async def deactivate_cafe(cafe_id: str, user_id: str = Depends(require_user)) -> StatusResponse:
    current_domain.process(DeactivateCafe(cafe_id=cafe_id, requested_by=user_id), asynchronous=False)
    return StatusResponse(status="deactivated")


@cafe_router.put("/{cafe_id}/activate", response_model=StatusResponse)
async def activate_cafe(cafe_id: str, user_id: str = Depends(require_user)) -> StatusResponse:
    current_domain.process(ReactivateCafe(cafe_id=cafe_id, requested_by=user_id), asynchronous=False)
    return StatusResponse(status="activated")


@cafe_router.delete("/{cafe_id}", response_model=CafeDeletedResponse)
async def delete_cafe(cafe_id: str, user_id: str = Depends(require_user)) -> CafeDeletedResponse:
    """Delete an owned cafe together with all of its ratings."""
    ratings_removed = current_domain.process(DeleteCafe(cafe_id=cafe_id, requested_by=user_id), asynchronous=False)
    return CafeDeletedResponse(ratings_removed=ratings_removed)


@cafe_router.post("/{cafe_id}/menu", status_code=201, response_model=MenuItemIdResponse)
async def add_menu_item(
    cafe_id: str, body: AddMenuItemRequest, user_id: str = Depends(require_user)
) -> MenuItemIdResponse:
    command = AddMenuItem(
        cafe_id=cafe_id,
        requested_by=user_id,
        name=body.name,
        price=body.price,
        category=body.category,
        description=body.description,
        image_url=body.image_url,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return MenuItemIdResponse(item_id=item_id)


@cafe_router.put("/{cafe_id}/menu/{item_id}", response_model=StatusResponse)
async def update_menu_item(
    cafe_id: str, item_id: str, body: UpdateMenuItemRequest, user_id: str = Depends(require_user)
) -> StatusResponse:
    """Edit the supplied fields of one menu item."""
    command = UpdateMenuItem(
        cafe_id=cafe_id,
        requested_by=user_id,
        item_id=item_id,
        **body.model_dump(exclude_none=True),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="updated")


@cafe_router.delete("/{cafe_id}/menu/{item_id}", response_model=StatusResponse)
async def remove_menu_item(cafe_id: str, item_id: str, user_id: str = Depends(require_user)) -> StatusResponse:
    command = RemoveMenuItem(cafe_id=cafe_id, requested_by=user_id, item_id=item_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="removed")
