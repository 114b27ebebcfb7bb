from sqlalchemy import String, Text, ForeignKey, Enum, DateTime, Uuid, Column, func
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone
import uuid
from enum import Enum as PyEnum

Base = declarative_base()


# version history is ordered by created_at, which needs sub-second precision
def _utcnow():
    return datetime.now(timezone.utc)


class OrganizationType(PyEnum):
    IE = "IE"
    LLC = "LLC"
    JSC = "JSC"


class TenderStatus(PyEnum):
    CREATED = "CREATED"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class TenderServiceType(PyEnum):
    CONSTRUCTION = "Construction"
    DELIVERY = "Delivery"
    MANUFACTURE = "Manufacture"


class BidStatus(PyEnum):
    CREATED = "CREATED"


class BidAuthorType(PyEnum):
    ORGANIZATION = "Organization"
    USER = "User"


class Employee(Base):
    __tablename__ = 'employee'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, index=True, nullable=False)
    first_name = Column(String(50))
    last_name = Column(String(50))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Organization(Base):
    __tablename__ = 'organization'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(Enum(OrganizationType))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class OrganizationResponsible(Base):
    __tablename__ = 'organization_responsible'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid, ForeignKey('organization.id', ondelete='CASCADE'))
    user_id = Column(Uuid, ForeignKey('employee.id', ondelete='CASCADE'))


class Tender(Base):
    __tablename__ = 'tender'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    service_type = Column(Enum(TenderServiceType), nullable=True)
    status = Column(Enum(TenderStatus), nullable=False, default=TenderStatus.CREATED)
    organization_id = Column(Uuid, ForeignKey('organization.id', ondelete='CASCADE'))
    creator_username = Column(String(50), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class TenderVersion(Base):
    __tablename__ = 'tender_version'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tender_id = Column(Uuid, ForeignKey('tender.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=_utcnow)


class Bid(Base):
    __tablename__ = 'bid'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    status = Column(Enum(BidStatus), nullable=False, default=BidStatus.CREATED)
    tender_id = Column(Uuid, ForeignKey('tender.id', ondelete='CASCADE'), nullable=False)
    author_type = Column(Enum(BidAuthorType), nullable=False)
    author_id = Column(Uuid, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class BidVersion(Base):
    __tablename__ = 'bid_version'
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    bid_id = Column(Uuid, ForeignKey('bid.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=_utcnow)
