from fastapi import Depends
from sqlmodel import Session

from app.database import get_session
from app.services import BidService, TenderService


def get_tender_service(session: Session = Depends(get_session)) -> TenderService:
    return TenderService(session)


def get_bid_service(session: Session = Depends(get_session)) -> BidService:
    return BidService(session)
