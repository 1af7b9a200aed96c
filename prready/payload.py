# prready/payload.py
"""
Typed Slack message payload for the "ready for review" notification.

Blocks and elements are small dataclasses with a ``to_dict()`` that follows
Slack's Block Kit schema. The whole message is turned into JSON in one place
(:meth:`Message.to_json`), so titles and bodies containing quotes, newlines or
control characters are escaped by the encoder.

Layout of the blocks produced by :func:`build_blocks`:

    context   avatar + "<!here> *actor* has a pull request ready for review."
    header    "Ready for Review"
    context   "*Repository:* owner/repo"
    context   "*Title:* PR title"
    divider
    section   PR body with @handles resolved
    actions   [View Pull Request] [View JIRA Ticket]
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import Settings
from .fields import Field, select_fields
from .ids import extract_ticket_id, resolve_mentions

HEADER_TEXT = "Ready for Review"
AVATAR_ALT_TEXT = "github user"
TICKET_BUTTON_VALUE = "click_me_123"


# --------------------------------------------------------------------------- #
# Elements
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class PlainText:
    text: str
    type: str = field(default="plain_text", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class Markdown:
    text: str
    type: str = field(default="mrkdwn", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ImageElement:
    image_url: str
    alt_text: str
    type: str = field(default="image", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "image_url": self.image_url, "alt_text": self.alt_text}


@dataclass(frozen=True)
class Button:
    text: str
    url: str
    style: str = "primary"
    value: str = ""
    type: str = field(default="button", init=False)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.type,
            "text": PlainText(self.text).to_dict(),
            "style": self.style,
            "url": self.url,
        }
        if self.value:
            d["value"] = self.value
        return d


ContextElement = Union[ImageElement, Markdown, PlainText]


# --------------------------------------------------------------------------- #
# Blocks
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class ContextBlock:
    elements: List[ContextElement]
    type: str = field(default="context", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "elements": [e.to_dict() for e in self.elements]}


@dataclass(frozen=True)
class HeaderBlock:
    text: str
    type: str = field(default="header", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": PlainText(self.text).to_dict()}


@dataclass(frozen=True)
class DividerBlock:
    type: str = field(default="divider", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class SectionBlock:
    text: Markdown
    type: str = field(default="section", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text.to_dict()}


@dataclass(frozen=True)
class ActionsBlock:
    elements: List[Button]
    type: str = field(default="actions", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "elements": [b.to_dict() for b in self.elements]}


Block = Union[ContextBlock, HeaderBlock, DividerBlock, SectionBlock, ActionsBlock]


# --------------------------------------------------------------------------- #
# Message
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Attachment:
    """Legacy attachment: display fields with accent color and footer."""

    fallback: str
    color: str = ""
    footer: str = ""
    fields: List[Field] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"fallback": self.fallback}
        if self.color:
            d["color"] = self.color
        if self.footer:
            d["footer"] = self.footer
        if self.fields:
            d["fields"] = [f.to_dict() for f in self.fields]
        return d


@dataclass(frozen=True)
class Message:
    """
    Outgoing webhook payload.

    ``fields`` always holds the selected display fields. They reach the wire
    only through ``attachments``.
    """

    username: str = ""
    icon_url: str = ""
    icon_emoji: str = ""
    channel: str = ""
    link_names: str = ""
    text: str = ""
    unfurl_links: bool = False
    fields: List[Field] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)
    blocks: List[Block] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        for key in ("text", "username", "icon_url", "icon_emoji", "channel", "link_names"):
            value = getattr(self, key)
            if value:
                d[key] = value
        d["unfurl_links"] = self.unfurl_links
        if self.attachments:
            d["attachments"] = [a.to_dict() for a in self.attachments]
        if self.blocks:
            d["blocks"] = [b.to_dict() for b in self.blocks]
        return d

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def ticket_url(s: Settings) -> str:
    return s.jira_base_url + extract_ticket_id(s.pr_title, s.jira_project)


def build_blocks(s: Settings, mentions: Mapping[str, str]) -> List[Block]:
    """Rich blocks for the ready-for-review message."""
    return [
        ContextBlock(
            [
                ImageElement(s.avatar_url, AVATAR_ALT_TEXT),
                Markdown(f"<!here> *{s.actor}* has a pull request ready for review."),
            ]
        ),
        HeaderBlock(HEADER_TEXT),
        ContextBlock([Markdown(f"*Repository:* {s.repository}")]),
        ContextBlock([Markdown(f"*Title:* {s.pr_title}")]),
        DividerBlock(),
        SectionBlock(Markdown(resolve_mentions(s.pr_body, mentions))),
        ActionsBlock(
            [
                Button("View Pull Request", s.pull_request_url),
                Button("View JIRA Ticket", ticket_url(s), value=TICKET_BUTTON_VALUE),
            ]
        ),
    ]


def build_message(
    s: Settings,
    mentions: Mapping[str, str],
    *,
    attach_fields: bool = False,
) -> Message:
    """Assemble the full payload.

    Parameters:
        s: Settings read from the environment.
        mentions: Handle → user id table used for the PR body.
        attach_fields: Also send the display fields as a colored attachment.
    """
    fields = select_fields(s)
    attachments: List[Attachment] = []
    if attach_fields:
        attachments.append(
            Attachment(fallback=s.message, color=s.color, footer=s.footer, fields=fields)
        )

    return Message(
        username=s.username,
        icon_url=s.icon_url,
        icon_emoji=s.icon_emoji,
        channel=s.channel,
        link_names=s.link_names,
        fields=fields,
        attachments=attachments,
        blocks=build_blocks(s, mentions),
    )
