# prready/fields.py
"""
Display field selection.

MSG_MINIMAL controls which summary fields accompany the message:

    unset          Ref, Event, Actions URL, Commit, <message>
    "true"         <message>
    "commit,ref"   Ref, Commit, <message>

In list form every recognised keyword is pushed onto the front of the list,
so fields come out in reverse keyword order with the message last. Unknown
keywords are skipped.

When HOST_NAME is set, the site and host fields are placed ahead of
everything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .config import Settings
from .ids import short_sha
from .logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Field:
    """One title/value pair; ``short`` fields render two to a row."""

    title: str = ""
    value: str = ""
    short: bool = False

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        if self.title:
            d["title"] = self.title
        if self.value:
            d["value"] = self.value
        if self.short:
            d["short"] = True
        return d


def ref_field(s: Settings) -> Field:
    return Field("Ref", s.ref, True)


def event_field(s: Settings) -> Field:
    return Field("Event", s.event_name, True)


def actions_url_field(s: Settings) -> Field:
    return Field("Actions URL", f"<{s.repo_url}/commit/{s.sha}/checks|{s.workflow}>", True)


def commit_field(s: Settings) -> Field:
    return Field("Commit", f"<{s.repo_url}/commit/{s.sha}|{short_sha(s.sha)}>", True)


def message_field(s: Settings) -> Field:
    return Field(s.title, s.message_or_eom, False)


FIELD_BUILDERS: Dict[str, Callable[[Settings], Field]] = {
    "ref": ref_field,
    "event": event_field,
    "actions url": actions_url_field,
    "commit": commit_field,
}

FULL_ORDER = ["ref", "event", "actions url", "commit"]


def _from_keywords(s: Settings, minimal: str) -> List[Field]:
    fields = [message_field(s)]
    for raw in minimal.split(","):
        keyword = raw.strip().lower()
        build = FIELD_BUILDERS.get(keyword)
        if build is None:
            log.debug("Ignoring unknown MSG_MINIMAL keyword %r", raw)
            continue
        fields.insert(0, build(s))
    return fields


def select_fields(s: Settings) -> List[Field]:
    """Return the ordered display fields for the current settings."""
    if not s.minimal:
        fields = [FIELD_BUILDERS[k](s) for k in FULL_ORDER] + [message_field(s)]
    elif s.minimal == "true":
        fields = [message_field(s)]
    else:
        fields = _from_keywords(s, s.minimal)

    if s.host_name:
        fields = [
            Field(s.site_title, s.site_name, True),
            Field(s.host_title, s.host_name, True),
        ] + fields

    log.debug("Selected fields: %s", [f.title for f in fields])
    return fields
