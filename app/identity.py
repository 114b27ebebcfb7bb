import uuid
from typing import Optional

from sqlmodel import Session, select

from app.database import storage_errors
from app.models import Employee, Organization, OrganizationResponsible


class IdentityResolver:
    """Maps usernames and user ids onto users and the organization they represent."""

    def __init__(self, session: Session):
        self.session = session

    def resolve_user(self, username: str) -> Optional[uuid.UUID]:
        if not username:
            return None
        with storage_errors(self.session, "find user by username"):
            return self.session.exec(select(Employee.id).where(Employee.username == username)).first()

    def resolve_organization(self, username: str) -> Optional[uuid.UUID]:
        if not username:
            return None
        query = (
            select(Organization.id)
            .join(OrganizationResponsible, OrganizationResponsible.organization_id == Organization.id)
            .join(Employee, Employee.id == OrganizationResponsible.user_id)
            .where(Employee.username == username)
        )
        with storage_errors(self.session, "find organization by username"):
            return self.session.exec(query).first()

    def resolve_organization_by_user(self, user_id: uuid.UUID) -> Optional[uuid.UUID]:
        query = (
            select(Organization.id)
            .join(OrganizationResponsible, OrganizationResponsible.organization_id == Organization.id)
            .where(OrganizationResponsible.user_id == user_id)
        )
        with storage_errors(self.session, "find organization by user id"):
            return self.session.exec(query).first()
