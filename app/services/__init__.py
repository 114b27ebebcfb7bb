from app.services.bids import BidService
from app.services.tenders import TenderService

__all__ = ["BidService", "TenderService"]
