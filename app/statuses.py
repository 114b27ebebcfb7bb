"""Legal status values and parsing of the enum-like request fields.

Tender status moves along CREATED -> PUBLISHED -> CLOSED, and CANCELLED can be
reached from anywhere. Only membership in the set of named states is checked:
any named status may replace any other, as long as the caller owns the tender.
"""
import uuid
from typing import Optional, Union

from app.errors import ValidationError
from app.models import TenderStatus, TenderServiceType, BidAuthorType


def parse_tender_status(value: Union[str, TenderStatus, None]) -> TenderStatus:
    if isinstance(value, TenderStatus):
        return value
    if not value:
        raise ValidationError("status is mandatory")
    try:
        return TenderStatus(value.strip().upper())
    except ValueError:
        raise ValidationError(f"invalid status: {value}") from None


def change_status(current: TenderStatus, target: TenderStatus) -> TenderStatus:
    # No adjacency table: every named state is reachable from every other.
    return target


def parse_service_type(value: Union[str, TenderServiceType, None]) -> Optional[TenderServiceType]:
    if value is None or isinstance(value, TenderServiceType):
        return value
    if value == "":
        return None
    try:
        return TenderServiceType(value)
    except ValueError:
        raise ValidationError(f"unknown service type: {value}") from None


def parse_author_type(value: Union[str, BidAuthorType, None]) -> BidAuthorType:
    if isinstance(value, BidAuthorType):
        return value
    if not value:
        raise ValidationError("authorType is mandatory")
    try:
        return BidAuthorType(value)
    except ValueError:
        raise ValidationError(f"unknown author type: {value}") from None


def parse_uuid(value: Union[str, uuid.UUID, None], field: str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if not value:
        raise ValidationError(f"{field} is mandatory")
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(f"invalid {field} format") from None
