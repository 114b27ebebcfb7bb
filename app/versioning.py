"""Edit history and rollback shared by tenders and bids.

Both entities keep their editable ``name``/``description`` in the main table
and append a copy of those fields to a version table right before each edit.
Versions are addressed by their own id. Rolling back copies a version's fields
onto the entity without recording the state being replaced.
"""
import logging
import uuid
from typing import Generic, List, Mapping, Optional, Type, TypeVar

from sqlmodel import Session, select

from app.database import storage_errors
from app.errors import ForbiddenError, NotFoundError
from app.models import Bid, BidVersion, Tender, TenderVersion

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")
VersionT = TypeVar("VersionT")

VERSIONED_FIELDS = ("name", "description")


class VersionedEntityStore(Generic[EntityT, VersionT]):
    def __init__(
            self,
            session: Session,
            entity_model: Type[EntityT],
            version_model: Type[VersionT],
            parent_field: str,
            label: str,
    ):
        self.session = session
        self.entity_model = entity_model
        self.version_model = version_model
        self.parent_field = parent_field
        self.label = label

    def get(self, entity_id: uuid.UUID) -> Optional[EntityT]:
        with storage_errors(self.session, f"get {self.label}"):
            return self.session.get(self.entity_model, entity_id)

    def get_version(self, version_id: uuid.UUID) -> Optional[VersionT]:
        with storage_errors(self.session, f"get {self.label} version"):
            return self.session.get(self.version_model, version_id)

    def versions(self, entity_id: uuid.UUID) -> List[VersionT]:
        parent = getattr(self.version_model, self.parent_field)
        query = select(self.version_model).where(parent == entity_id).order_by(self.version_model.created_at)
        with storage_errors(self.session, f"list {self.label} versions"):
            return list(self.session.exec(query).all())

    def snapshot(self, entity: EntityT) -> VersionT:
        """Persist the current editable fields of ``entity`` as a new version.

        The version is committed on its own so that a failed insert stops the
        edit it guards, while a failure after it leaves only a harmless history
        row behind.
        """
        values = {field: getattr(entity, field) for field in VERSIONED_FIELDS}
        version = self.version_model(**{self.parent_field: entity.id}, **values)
        with storage_errors(self.session, f"add {self.label} version"):
            self.session.add(version)
            self.session.commit()
            self.session.refresh(version)
        return version

    def apply_edit(self, entity: EntityT, patch: Mapping[str, Optional[str]]) -> EntityT:
        # Empty strings count as "not supplied".
        changes = {key: value for key, value in patch.items() if key in VERSIONED_FIELDS and value}

        version = self.snapshot(entity)
        for key, value in changes.items():
            setattr(entity, key, value)
        self._save(entity, "update")
        logger.info("%s %s edited, previous state kept as version %s", self.label.capitalize(), entity.id, version.id)
        return entity

    def rollback(self, entity: EntityT, version_id: uuid.UUID) -> EntityT:
        version = self.get_version(version_id)
        if version is None:
            raise NotFoundError(f"{self.label} version not found")
        if getattr(version, self.parent_field) != entity.id:
            raise ForbiddenError(f"{self.label} version does not belong to {self.label}")

        for field in VERSIONED_FIELDS:
            setattr(entity, field, getattr(version, field))
        self._save(entity, "roll back")
        logger.info("%s %s rolled back to version %s", self.label.capitalize(), entity.id, version.id)
        return entity

    def _save(self, entity: EntityT, action: str) -> None:
        with storage_errors(self.session, f"{action} {self.label}"):
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)


def tender_store(session: Session) -> VersionedEntityStore[Tender, TenderVersion]:
    return VersionedEntityStore(session, Tender, TenderVersion, "tender_id", "tender")


def bid_store(session: Session) -> VersionedEntityStore[Bid, BidVersion]:
    return VersionedEntityStore(session, Bid, BidVersion, "bid_id", "bid")
