from fastapi import APIRouter, Depends, Query
from app.models import TenderStatus
from app.routes._deps import get_tender_service
from app.schemas import TenderCreate, TenderResponse, EntityUpdate, VersionResponse
from app.services import TenderService
from typing import List, Optional
import uuid

router = APIRouter()


# all PUBLISHED tenders, visible for all users
@router.get("/tenders", response_model=List[TenderResponse])
def get_tenders(
        service_type: Optional[str] = None,
        limit: Optional[int] = Query(None),
        offset: Optional[int] = Query(None),
        service: TenderService = Depends(get_tender_service)
):
    return service.list_tenders(service_type, limit, offset)


@router.post("/tenders/new", response_model=TenderResponse)
def create_tender(
        tender: TenderCreate,
        service: TenderService = Depends(get_tender_service)
):
    return service.create_tender(
        name=tender.name,
        description=tender.description,
        service_type=tender.service_type,
        organization_id=tender.organization_id,
        creator_username=tender.creator_username,
    )


@router.get("/tenders/my", response_model=List[TenderResponse])
def get_user_tenders(
        username: str = "",
        limit: Optional[int] = Query(None),
        offset: Optional[int] = Query(None),
        service: TenderService = Depends(get_tender_service)
):
    return service.my_tenders(username, limit, offset)


@router.get("/tenders/{tender_id}/status", response_model=TenderStatus)
def get_tender_status(
        tender_id: uuid.UUID,
        service: TenderService = Depends(get_tender_service)
):
    return service.get_status(tender_id)


# only organization responsible can change status
@router.put("/tenders/{tender_id}/status", response_model=TenderResponse)
def update_tender_status(
        tender_id: uuid.UUID,
        status: str = "",
        username: str = "",
        service: TenderService = Depends(get_tender_service)
):
    return service.set_status(tender_id, status, username)


# only organization responsible can edit
@router.patch("/tenders/{tender_id}/edit", response_model=TenderResponse)
def edit_tender(
        tender_id: uuid.UUID,
        tender_update: EntityUpdate,
        username: str = "",
        service: TenderService = Depends(get_tender_service)
):
    return service.edit_tender(tender_id, username, tender_update.model_dump(exclude_unset=True))


@router.put("/tenders/{tender_id}/rollback/{version}", response_model=TenderResponse)
def rollback_tender(
        tender_id: uuid.UUID,
        version: uuid.UUID,
        username: str = "",
        service: TenderService = Depends(get_tender_service)
):
    return service.rollback_tender(tender_id, version, username)


@router.get("/tenders/{tender_id}/versions", response_model=List[VersionResponse])
def get_tender_versions(
        tender_id: uuid.UUID,
        username: str = "",
        service: TenderService = Depends(get_tender_service)
):
    return service.tender_versions(tender_id, username)
