"""Listing endpoints for the BarterCoin API."""

from fastapi import APIRouter, Query, Response, status

from bartercoin.core.settings import settings
from bartercoin.models import Listing
from bartercoin.schemas.common import Pagination
from bartercoin.schemas.listing import ListingCreate, ListingPage, ListingResponse, ListingUpdate

from ..dependencies import CurrentUserDep, ListingServiceDep

router = APIRouter(prefix="/listings", tags=["listings"])


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
def create_listing(
    payload: ListingCreate,
    current_user: CurrentUserDep,
    listings: ListingServiceDep,
) -> Listing:
    """Post a new ACTIVE listing owned by the caller."""
    return listings.create(current_user.id, payload.model_dump())


@router.get("", response_model=ListingPage)
def list_listings(
    listings: ListingServiceDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(10, ge=1, le=settings.listings_page_size_max),
    category: str | None = Query(None, description="Exact category filter"),
    search: str | None = Query(None, description="Case-insensitive title/description match"),
) -> ListingPage:
    """Browse ACTIVE listings, newest first."""
    items, total = listings.list(page=page, limit=limit, category=category, search=search)
    return ListingPage(
        listings=[ListingResponse.model_validate(item) for item in items],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/mine", response_model=list[ListingResponse])
def list_my_listings(current_user: CurrentUserDep, listings: ListingServiceDep) -> list[Listing]:
    return listings.list_for_owner(current_user.id)


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: str, listings: ListingServiceDep) -> Listing:
    return listings.get(listing_id)


@router.patch("/{listing_id}", response_model=ListingResponse)
def update_listing(
    listing_id: str,
    payload: ListingUpdate,
    current_user: CurrentUserDep,
    listings: ListingServiceDep,
) -> Listing:
    return listings.update(listing_id, current_user.id, payload.model_dump(exclude_unset=True))


@router.post("/{listing_id}/archive", response_model=ListingResponse)
def archive_listing(
    listing_id: str,
    current_user: CurrentUserDep,
    listings: ListingServiceDep,
) -> Listing:
    return listings.archive(listing_id, current_user.id)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_listing(
    listing_id: str,
    current_user: CurrentUserDep,
    listings: ListingServiceDep,
) -> Response:
    listings.delete(listing_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
