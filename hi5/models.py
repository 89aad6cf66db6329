"""Core data models shared by the slash-command pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class IncomingRequest:
    """Form fields posted by Slack for one slash-command invocation."""

    token: str = ""
    response_url: str = ""
    user_name: str = ""
    text: str = ""


@dataclass(frozen=True, slots=True)
class Query:
    """Validated search request built from the command text.

    ``radius`` is expressed in meters, the unit Yelp expects. When ``help`` is
    set the search fields are left empty.
    """

    token: str = ""
    response_url: str = ""
    user_name: str = ""
    category: str = ""
    location: str = ""
    radius: int = 0
    term: str = ""
    help: bool = False


@dataclass(frozen=True, slots=True)
class Business:
    """Normalized snapshot of a business returned by the Yelp search API."""

    name: str
    image_url: str = ""
    url: str = ""
    review_count: int = 0
    price: str = ""
    rating: float = 0.0
    display_address: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TextObject:
    text: str
    type: str = "mrkdwn"


@dataclass(frozen=True, slots=True)
class ImageAccessory:
    image_url: str
    alt_text: str
    type: str = "image"


@dataclass(frozen=True, slots=True)
class Block:
    type: str
    text: Optional[TextObject] = None
    accessory: Optional[ImageAccessory] = None

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"type": self.type}
        if self.text is not None:
            entry["text"] = asdict(self.text)
        if self.accessory is not None:
            entry["accessory"] = asdict(self.accessory)
        return entry


@dataclass(frozen=True, slots=True)
class MessagePayload:
    """Slack message posted to a slash command's ``response_url``."""

    blocks: Tuple[Block, ...]
    response_type: str = "in_channel"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response_type": self.response_type,
            "blocks": [block.to_dict() for block in self.blocks],
        }
