"""Client utilities for the Yelp Fusion business search API."""

import logging
from typing import Any, Dict, Optional

import requests

from hi5.models import Query

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://api.yelp.com/v3/businesses"

RESULT_LIMIT = 5
SORT_BY = "rating"


class YelpError(RuntimeError):
    """Raised when the search API is unreachable or returns an unusable response."""


def build_search_params(query: Query) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "location": query.location,
        "radius": query.radius,
        "categories": query.category,
        "limit": RESULT_LIMIT,
        "sort_by": SORT_BY,
    }
    if query.term:
        params["term"] = query.term
    return params


def business_search(query: Query, api_key: str, timeout: Optional[float] = 10) -> Dict[str, Any]:
    """Run a business search and return the decoded JSON payload."""
    params = build_search_params(query)
    headers = {"Authorization": f"Bearer {api_key}"}
    logger.info("Calling Yelp business search: categories=%s location=%s", query.category, query.location)

    try:
        response = _SESSION.get(f"{_BASE_URL}/search", params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        raise YelpError(f"business search failed: {exc}") from exc
    except ValueError as exc:
        raise YelpError(f"business search returned invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        logger.error("business_search returned unexpected payload type=%s", type(payload).__name__)
        raise YelpError("business search returned a non-object payload")
    return payload
