"""Delivery of slash-command replies to Slack's ``response_url``."""

import logging
from typing import Optional

import requests

from hi5.models import MessagePayload

logger = logging.getLogger(__name__)

USER_AGENT = "Hi5SlashCommand/1.0"


class SlackPublishError(RuntimeError):
    """Raised when a message cannot be delivered to the callback URL."""


def post_message(response_url: str, payload: MessagePayload, timeout: Optional[float] = 10) -> None:
    """POST a message payload to Slack as JSON."""
    logger.info("Posting %d blocks to Slack", len(payload.blocks))
    try:
        response = requests.post(
            response_url,
            json=payload.to_dict(),
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise SlackPublishError(f"failed to post to Slack: {exc}") from exc
