import uuid

import pytest

from app.errors import ValidationError
from app.models import BidAuthorType, TenderServiceType, TenderStatus
from app.statuses import change_status, parse_author_type, parse_service_type, parse_tender_status, parse_uuid


@pytest.mark.parametrize("raw", ["published", "Published", " PUBLISHED "])
def test_status_is_case_insensitive(raw):
    assert parse_tender_status(raw) is TenderStatus.PUBLISHED


@pytest.mark.parametrize("raw", ["", None, "OPEN", "deleted"])
def test_unknown_status_is_rejected(raw):
    with pytest.raises(ValidationError):
        parse_tender_status(raw)


@pytest.mark.parametrize("current", list(TenderStatus))
@pytest.mark.parametrize("target", list(TenderStatus))
def test_any_named_status_can_replace_any_other(current, target):
    assert change_status(current, target) is target


def test_service_type_parsing():
    assert parse_service_type("Delivery") is TenderServiceType.DELIVERY
    assert parse_service_type("") is None
    assert parse_service_type(None) is None
    with pytest.raises(ValidationError, match="unknown service type"):
        parse_service_type("delivery")


def test_author_type_parsing():
    assert parse_author_type("User") is BidAuthorType.USER
    assert parse_author_type(BidAuthorType.ORGANIZATION) is BidAuthorType.ORGANIZATION
    with pytest.raises(ValidationError, match="mandatory"):
        parse_author_type("")
    with pytest.raises(ValidationError, match="unknown author type"):
        parse_author_type("Robot")


def test_uuid_parsing():
    value = uuid.uuid4()
    assert parse_uuid(str(value), "tenderId") == value
    with pytest.raises(ValidationError, match="invalid tenderId format"):
        parse_uuid("not-a-uuid", "tenderId")
    with pytest.raises(ValidationError, match="bidId is mandatory"):
        parse_uuid(None, "bidId")
