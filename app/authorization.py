"""Authorization decisions based on organization membership.

Every check returns a :class:`Decision` instead of a bare boolean so callers
keep "who are you" (unauthorized), "you may not" (forbidden) and "no such
thing" (not found) apart. ``Decision.enforce()`` turns a denial into the
matching :mod:`app.errors` exception.
"""
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.errors import ForbiddenError, NotFoundError, UnauthorizedError
from app.models import Bid, BidAuthorType, Tender


class Outcome(Enum):
    ALLOWED = "allowed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


_ERRORS = {
    Outcome.UNAUTHORIZED: UnauthorizedError,
    Outcome.FORBIDDEN: ForbiddenError,
    Outcome.NOT_FOUND: NotFoundError,
}


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    reason: str = ""

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOWED

    def enforce(self) -> None:
        if not self.allowed:
            raise _ERRORS[self.outcome](self.reason)


ALLOW = Decision(Outcome.ALLOWED)


def can_act_on_tender(tender: Optional[Tender], acting_organization_id: Optional[uuid.UUID]) -> Decision:
    if tender is None:
        return Decision(Outcome.NOT_FOUND, "tender not found")
    if acting_organization_id is None:
        return Decision(Outcome.UNAUTHORIZED, "user not found")
    if tender.organization_id != acting_organization_id:
        return Decision(Outcome.FORBIDDEN, "user does not have permissions to this tender")
    return ALLOW


def can_submit_bid(
        tender: Optional[Tender],
        author_type: BidAuthorType,
        author_id: uuid.UUID,
        resolved_organization_id: Optional[uuid.UUID],
) -> Decision:
    """Decide whether ``author_id`` may bid on ``tender``.

    Organization authors must be the tender's organization itself. User
    authors are checked through the organization they are responsible for,
    which the caller resolves beforehand; ``None`` means the user does not
    exist or represents no organization.
    """
    if tender is None:
        return Decision(Outcome.NOT_FOUND, "tender not found")

    if author_type == BidAuthorType.ORGANIZATION:
        if author_id != tender.organization_id:
            return Decision(Outcome.FORBIDDEN, f"tender does not belong to organization {author_id}")
        return ALLOW

    if resolved_organization_id is None:
        return Decision(Outcome.UNAUTHORIZED, "user not found")
    if resolved_organization_id != tender.organization_id:
        return Decision(Outcome.FORBIDDEN, "user does not have permissions to this tender")
    return ALLOW


def can_act_on_bid(
        bid: Optional[Bid],
        acting_user_id: Optional[uuid.UUID],
        acting_organization_id: Optional[uuid.UUID],
) -> Decision:
    if bid is None:
        return Decision(Outcome.NOT_FOUND, "bid not found")
    if acting_user_id is None:
        return Decision(Outcome.UNAUTHORIZED, "user not found")

    if bid.author_type == BidAuthorType.USER:
        permitted = bid.author_id == acting_user_id
    else:
        permitted = acting_organization_id is not None and bid.author_id == acting_organization_id

    if not permitted:
        return Decision(Outcome.FORBIDDEN, "user is not the author of this bid")
    return ALLOW
