from fastapi import APIRouter, Depends, Query
from app.routes._deps import get_bid_service
from app.schemas import BidCreate, BidResponse, EntityUpdate, VersionResponse
from app.services import BidService
from typing import List, Optional
import uuid

router = APIRouter()


# authorType User: the user's organization must own the tender; Organization: the owner itself
@router.post("/bids/new", response_model=BidResponse)
def create_bid(bid: BidCreate, service: BidService = Depends(get_bid_service)):
    return service.create_bid(
        name=bid.name,
        description=bid.description,
        tender_id=bid.tender_id,
        author_type=bid.author_type,
        author_id=bid.author_id,
    )


@router.get("/bids/my", response_model=List[BidResponse])
def get_user_bids(
        username: str = "",
        limit: Optional[int] = Query(None),
        offset: Optional[int] = Query(None),
        service: BidService = Depends(get_bid_service)
):
    return service.my_bids(username, limit, offset)


# only responsible for tender's organization can view
@router.get("/bids/{tender_id}/list", response_model=List[BidResponse])
def get_bids_for_tender(
        tender_id: uuid.UUID,
        username: str = "",
        limit: Optional[int] = Query(None),
        offset: Optional[int] = Query(None),
        service: BidService = Depends(get_bid_service)
):
    return service.list_bids_by_tender(tender_id, username, limit, offset)


# only bid author can change bid
@router.patch("/bids/{bid_id}/edit", response_model=BidResponse)
def edit_bid(
        bid_id: uuid.UUID,
        bid_update: EntityUpdate,
        username: str = "",
        service: BidService = Depends(get_bid_service)
):
    return service.edit_bid(bid_id, username, bid_update.model_dump(exclude_unset=True))


@router.put("/bids/{bid_id}/rollback/{version}", response_model=BidResponse)
def rollback_bid(
        bid_id: uuid.UUID,
        version: uuid.UUID,
        username: str = "",
        service: BidService = Depends(get_bid_service)
):
    return service.rollback_bid(bid_id, version, username)


@router.get("/bids/{bid_id}/versions", response_model=List[VersionResponse])
def get_bid_versions(
        bid_id: uuid.UUID,
        username: str = "",
        service: BidService = Depends(get_bid_service)
):
    return service.bid_versions(bid_id, username)
