"""Utilities for transforming Yelp search responses into ``Business`` records."""

import logging
from typing import Any, Dict, List, Optional

from hi5.models import Business

logger = logging.getLogger(__name__)


def _safe_float(value: Any) -> float:
    try:
        if value is None:
            return 0.0
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _safe_int(value: Any) -> int:
    try:
        if value is None:
            return 0
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _string(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def to_business(result: Dict[str, Any]) -> Business:
    location = result.get("location")
    if not isinstance(location, dict):
        location = {}
    address = location.get("display_address")
    if not isinstance(address, (list, tuple)):
        address = [address] if isinstance(address, str) and address else []

    return Business(
        name=_string(result.get("name")),
        image_url=_string(result.get("image_url")),
        url=_string(result.get("url")),
        review_count=_safe_int(result.get("review_count")),
        price=_string(result.get("price")),
        rating=_safe_float(result.get("rating")),
        display_address=tuple(_string(line) for line in address),
    )


def to_businesses(payload: Optional[Dict[str, Any]]) -> List[Business]:
    """Extract the ``businesses`` array, keeping the API's ranking order."""
    if not payload:
        return []

    items = payload.get("businesses")
    if not isinstance(items, list):
        logger.warning("Yelp response missing businesses list. keys=%s", list(payload.keys())[:10])
        return []

    return [to_business(item) for item in items if isinstance(item, dict)]
