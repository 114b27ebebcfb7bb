import logging
from typing import List, Mapping, Optional

from sqlalchemy import and_, or_
from sqlmodel import Session, select

from app.authorization import can_act_on_bid, can_act_on_tender, can_submit_bid
from app.database import storage_errors
from app.errors import UnauthorizedError, ValidationError
from app.identity import IdentityResolver
from app.models import Bid, BidAuthorType, BidStatus, BidVersion
from app.pagination import page
from app.statuses import parse_author_type, parse_uuid
from app.versioning import bid_store, tender_store

logger = logging.getLogger(__name__)


class BidService:
    def __init__(self, session: Session, identity: Optional[IdentityResolver] = None):
        self.session = session
        self.identity = identity or IdentityResolver(session)
        self.store = bid_store(session)
        self.tenders = tender_store(session)

    # author is either a user of the tender's organization or the organization itself
    def create_bid(self, name: str, description: Optional[str], tender_id, author_type, author_id) -> Bid:
        if not name:
            raise ValidationError("name is mandatory")
        tender_id = parse_uuid(tender_id, "tenderId")
        author_type = parse_author_type(author_type)
        author_id = parse_uuid(author_id, "authorId")

        tender = self.tenders.get(tender_id)
        resolved_organization_id = None
        if tender is not None and author_type == BidAuthorType.USER:
            resolved_organization_id = self.identity.resolve_organization_by_user(author_id)

        decision = can_submit_bid(tender, author_type, author_id, resolved_organization_id)
        if not decision.allowed:
            logger.warning("Bid by %s %s on tender %s rejected: %s",
                           author_type.value, author_id, tender_id, decision.reason)
        decision.enforce()

        bid = Bid(
            name=name,
            description=description,
            tender_id=tender_id,
            author_type=author_type,
            author_id=author_id,
            status=BidStatus.CREATED,
        )
        with storage_errors(self.session, "save bid"):
            self.session.add(bid)
            self.session.commit()
            self.session.refresh(bid)
        logger.info("Bid %s created on tender %s", bid.id, tender_id)
        return bid

    # bids the user wrote personally plus bids of the organization they represent
    def my_bids(self, username: str, limit: int = None, offset: int = None) -> List[Bid]:
        if not username:
            raise ValidationError("username is mandatory")
        limit, offset = page(limit, offset)

        user_id = self.identity.resolve_user(username)
        if user_id is None:
            raise UnauthorizedError(f"user not found: {username}")
        organization_id = self.identity.resolve_organization(username)

        authored = and_(Bid.author_type == BidAuthorType.USER, Bid.author_id == user_id)
        if organization_id is not None:
            authored = or_(authored, and_(Bid.author_type == BidAuthorType.ORGANIZATION,
                                          Bid.author_id == organization_id))
        query = select(Bid).where(authored).order_by(Bid.name).offset(offset).limit(limit)
        with storage_errors(self.session, "select bids by author"):
            return list(self.session.exec(query).all())

    # only responsible for tender's organization can view
    def list_bids_by_tender(self, tender_id, username: str, limit: int = None, offset: int = None) -> List[Bid]:
        tender_id = parse_uuid(tender_id, "tenderId")
        if not username:
            raise ValidationError("username is mandatory")
        limit, offset = page(limit, offset)

        acting_organization_id = self.identity.resolve_organization(username)
        if acting_organization_id is None:
            raise UnauthorizedError(f"user not found: {username}")

        tender = self.tenders.get(tender_id)
        decision = can_act_on_tender(tender, acting_organization_id)
        if not decision.allowed:
            logger.warning("User %s denied bid list of tender %s: %s", username, tender_id, decision.reason)
        decision.enforce()

        query = select(Bid).where(Bid.tender_id == tender_id)
        query = query.order_by(Bid.name).offset(offset).limit(limit)
        with storage_errors(self.session, "select bids by tender"):
            return list(self.session.exec(query).all())

    # only bid author can change bid
    def edit_bid(self, bid_id, username: str, patch: Mapping[str, Optional[str]]) -> Bid:
        bid = self._authorized_bid(bid_id, username)
        return self.store.apply_edit(bid, patch)

    def rollback_bid(self, bid_id, version_id, username: str) -> Bid:
        bid = self._authorized_bid(bid_id, username)
        return self.store.rollback(bid, parse_uuid(version_id, "version"))

    def bid_versions(self, bid_id, username: str) -> List[BidVersion]:
        bid = self._authorized_bid(bid_id, username)
        return self.store.versions(bid.id)

    def _authorized_bid(self, bid_id, username: str) -> Bid:
        bid_id = parse_uuid(bid_id, "bidId")
        if not username:
            raise ValidationError("missing username")

        bid = self.store.get(bid_id)
        user_id = organization_id = None
        if bid is not None:
            user_id = self.identity.resolve_user(username)
            if user_id is not None and bid.author_type == BidAuthorType.ORGANIZATION:
                organization_id = self.identity.resolve_organization(username)

        decision = can_act_on_bid(bid, user_id, organization_id)
        if not decision.allowed:
            logger.warning("User %s denied access to bid %s: %s", username, bid_id, decision.reason)
        decision.enforce()
        return bid
