from typing import Optional, Tuple

from app.config import get_settings
from app.errors import ValidationError


def page(limit: Optional[int] = None, offset: Optional[int] = None) -> Tuple[int, int]:
    settings = get_settings()
    if limit is None or limit == 0:
        limit = settings.DEFAULT_PAGE_SIZE
    if offset is None:
        offset = 0
    if limit < 0 or limit > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")
    if offset < 0:
        raise ValidationError("offset must not be negative")
    return limit, offset
