"""
Discord webhook message models.

An embed is the presentation block Discord renders for each entry of the
``embeds`` array of a webhook message.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class NotificationMode(Enum):
    """How a batch of deals is presented."""

    DETAIL = "detail"
    TABLE = "table"


class VoteTier(Enum):
    """Vote-count bands used to colour detail embeds."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class EmbedField:
    """A labelled value shown inside an embed."""

    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass
class EmbedFooter:
    """Footer line of an embed."""

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text}


@dataclass
class Embed:
    """A single Discord embed."""

    title: str
    color: int
    url: Optional[str] = None
    description: Optional[str] = None
    fields: List[EmbedField] = field(default_factory=list)
    footer: Optional[EmbedFooter] = None

    def validate(self) -> bool:
        """Validate embed data against Discord's documented limits."""
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("title cannot be empty")

        if len(self.title) > 256:
            raise ValueError("title too long (max 256 characters)")

        if self.description is not None and len(self.description) > 4096:
            raise ValueError("description too long (max 4096 characters)")

        if not (0 <= self.color <= 0xFFFFFF):
            raise ValueError("color must be a 24-bit RGB integer")

        if len(self.fields) > 25:
            raise ValueError("too many fields (max 25)")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the webhook JSON shape, omitting unset keys."""
        data: Dict[str, Any] = {"title": self.title}
        if self.url:
            data["url"] = self.url
        if self.description:
            data["description"] = self.description
        data["color"] = self.color
        data["fields"] = [f.to_dict() for f in self.fields]
        if self.footer is not None:
            data["footer"] = self.footer.to_dict()
        return data


@dataclass
class WebhookPayload:
    """Envelope posted to a Discord webhook."""

    embeds: List[Embed]
    content: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.content:
            data["content"] = self.content
        data["embeds"] = [embed.to_dict() for embed in self.embeds]
        return data
