"""Decoding of Slack slash-command requests and parsing of the command text."""

from __future__ import annotations

import logging
import math
import re
from typing import Dict, List, Optional, Union
from urllib.parse import parse_qs

from hi5.models import IncomingRequest, Query

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_MILES = 5.0
MAX_RADIUS_MILES = 24.0
MILES_PER_METER = 0.00062137

COMMAND_KEYS = ("category", "location", "term", "radius")

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_RADIUS_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|[+-]?(inf|infinity|nan)", re.IGNORECASE)


class BadRequest(ValueError):
    """Raised when the webhook body is not valid form-encoded data."""


class ValidationError(ValueError):
    """Raised when the command text is incomplete or invalid.

    The message is shown to the Slack user as-is.
    """


def _parse_form(raw: str) -> Dict[str, List[str]]:
    if _BAD_ESCAPE.search(raw):
        raise ValueError("invalid percent-escape")
    return parse_qs(raw, keep_blank_values=True, errors="strict")


def _first(values: Dict[str, List[str]], key: str) -> str:
    items = values.get(key) or [""]
    return items[0]


def decode_request(body: Union[bytes, str]) -> IncomingRequest:
    """Decode a form-encoded webhook body into an ``IncomingRequest``.

    Missing fields become empty strings; malformed bodies raise ``BadRequest``.
    """
    try:
        raw = body.decode("utf-8") if isinstance(body, bytes) else body
        values = _parse_form(raw)
    except ValueError as exc:
        # UnicodeDecodeError is a ValueError subclass.
        raise BadRequest(f"Unable to decode form body: {exc}") from exc

    return IncomingRequest(
        token=_first(values, "token"),
        response_url=_first(values, "response_url"),
        user_name=_first(values, "user_name"),
        text=_first(values, "text"),
    )


def miles_to_meters(miles: float) -> int:
    return int(miles / MILES_PER_METER)


def _parse_radius(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_RADIUS_MILES
    if not _RADIUS_PATTERN.fullmatch(raw):
        logger.debug("Ignoring unparseable radius %r", raw)
        return DEFAULT_RADIUS_MILES
    value = float(raw)
    # +inf is caught by the maximum check; -inf has no meter equivalent.
    if math.isnan(value) or value == -math.inf:
        return DEFAULT_RADIUS_MILES
    return value


def _command_values(text: str) -> Dict[str, str]:
    try:
        values = _parse_form(text)
    except ValueError as exc:
        raise ValidationError("Unable to read command. Type `/hi5 help` for usage.") from exc
    return {key: _first(values, key) for key in COMMAND_KEYS}


def is_help(text: str) -> bool:
    return text.strip().lower() == "help"


def parse_command(request: IncomingRequest) -> Query:
    """Turn the free text of a slash command into a ``Query``.

    Grammar: ``category=<value>&location=<value>[&term=<value>][&radius=<miles>]``
    or the single word ``help``.
    """
    text = request.text.strip()
    if is_help(text):
        return Query(
            token=request.token,
            response_url=request.response_url,
            user_name=request.user_name,
            help=True,
        )

    values = _command_values(text)

    radius_miles = _parse_radius(values["radius"])
    if radius_miles > MAX_RADIUS_MILES:
        raise ValidationError("Maximum radius is 24 miles.")

    location = values["location"]
    if not location.strip():
        raise ValidationError("You must specify a location.")

    category = values["category"].strip()
    if not category:
        raise ValidationError("You must specify a category.")

    return Query(
        token=request.token,
        response_url=request.response_url,
        user_name=request.user_name,
        category=category.lower(),
        location=location,
        radius=miles_to_meters(radius_miles),
        term=values["term"],
    )
