import logging
from typing import List, Mapping, Optional

from sqlmodel import Session, select

from app.authorization import can_act_on_tender
from app.database import storage_errors
from app.errors import ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from app.identity import IdentityResolver
from app.models import Tender, TenderStatus, TenderVersion
from app.pagination import page
from app.statuses import change_status, parse_service_type, parse_tender_status, parse_uuid
from app.versioning import tender_store

logger = logging.getLogger(__name__)


class TenderService:
    def __init__(self, session: Session, identity: Optional[IdentityResolver] = None):
        self.session = session
        self.identity = identity or IdentityResolver(session)
        self.store = tender_store(session)

    # all PUBLISHED tenders, visible for all users
    def list_tenders(self, service_type=None, limit: int = None, offset: int = None) -> List[Tender]:
        limit, offset = page(limit, offset)
        service_type = parse_service_type(service_type)

        query = select(Tender).where(Tender.status == TenderStatus.PUBLISHED)
        if service_type:
            query = query.where(Tender.service_type == service_type)
        query = query.order_by(Tender.name).offset(offset).limit(limit)
        with storage_errors(self.session, "select tenders"):
            return list(self.session.exec(query).all())

    def create_tender(self, name: str, description: Optional[str], service_type, organization_id,
                      creator_username: str) -> Tender:
        if not name:
            raise ValidationError("missing tender name")
        if not creator_username:
            raise ValidationError("missing tender creatorUsername")
        service_type = parse_service_type(service_type)
        organization_id = parse_uuid(organization_id, "organizationId")

        acting_organization_id = self.identity.resolve_organization(creator_username)
        if acting_organization_id is None:
            raise UnauthorizedError(f"user not found: {creator_username}")
        if acting_organization_id != organization_id:
            logger.warning("User %s tried to create a tender for organization %s", creator_username, organization_id)
            raise ForbiddenError(f"user {creator_username} does not belong to organization {organization_id}")

        tender = Tender(
            name=name,
            description=description,
            service_type=service_type,
            organization_id=organization_id,
            creator_username=creator_username,
            status=TenderStatus.CREATED,
        )
        with storage_errors(self.session, "save tender"):
            self.session.add(tender)
            self.session.commit()
            self.session.refresh(tender)
        logger.info("Tender %s created by %s", tender.id, creator_username)
        return tender

    def my_tenders(self, username: str, limit: int = None, offset: int = None) -> List[Tender]:
        if not username:
            raise ValidationError("username is mandatory")
        limit, offset = page(limit, offset)
        if self.identity.resolve_user(username) is None:
            raise UnauthorizedError(f"user not found: {username}")

        query = select(Tender).where(Tender.creator_username.like(username))
        query = query.order_by(Tender.name).offset(offset).limit(limit)
        with storage_errors(self.session, "select tenders by creator"):
            return list(self.session.exec(query).all())

    def get_status(self, tender_id) -> TenderStatus:
        tender = self.store.get(parse_uuid(tender_id, "tenderId"))
        if tender is None:
            raise NotFoundError("tender not found")
        return tender.status

    # only organization responsible can change status
    def set_status(self, tender_id, status, username: str) -> Tender:
        status = parse_tender_status(status)
        tender = self._authorized_tender(tender_id, username)

        tender.status = change_status(tender.status, status)
        with storage_errors(self.session, "update tender status"):
            self.session.add(tender)
            self.session.commit()
            self.session.refresh(tender)
        logger.info("Tender %s status set to %s by %s", tender.id, status.value, username)
        return tender

    # only organization responsible can edit
    def edit_tender(self, tender_id, username: str, patch: Mapping[str, Optional[str]]) -> Tender:
        tender = self._authorized_tender(tender_id, username)
        return self.store.apply_edit(tender, patch)

    def rollback_tender(self, tender_id, version_id, username: str) -> Tender:
        tender = self._authorized_tender(tender_id, username)
        return self.store.rollback(tender, parse_uuid(version_id, "version"))

    def tender_versions(self, tender_id, username: str) -> List[TenderVersion]:
        tender = self._authorized_tender(tender_id, username)
        return self.store.versions(tender.id)

    def _authorized_tender(self, tender_id, username: str) -> Tender:
        tender_id = parse_uuid(tender_id, "tenderId")
        if not username:
            raise ValidationError("missing username")

        tender = self.store.get(tender_id)
        acting_organization_id = self.identity.resolve_organization(username) if tender else None
        decision = can_act_on_tender(tender, acting_organization_id)
        if not decision.allowed:
            logger.warning("User %s denied access to tender %s: %s", username, tender_id, decision.reason)
        decision.enforce()
        return tender
