from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from app.models import TenderStatus, TenderServiceType, BidStatus, BidAuthorType
from typing import Optional
import uuid


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TenderCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    service_type: Optional[TenderServiceType] = None
    organization_id: uuid.UUID
    creator_username: str = Field(..., min_length=1)


class TenderResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    service_type: Optional[TenderServiceType] = None
    status: TenderStatus
    organization_id: uuid.UUID
    creator_username: str


# empty strings are accepted and mean "leave unchanged"
class EntityUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None


class BidCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    tender_id: uuid.UUID
    author_type: BidAuthorType
    author_id: uuid.UUID


class BidResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    status: BidStatus
    tender_id: uuid.UUID
    author_type: BidAuthorType
    author_id: uuid.UUID


class VersionResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    tender_id: Optional[uuid.UUID] = None
    bid_id: Optional[uuid.UUID] = None
