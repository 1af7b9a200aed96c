# prready/ids.py
"""Identifier helpers: ticket ids from titles, user mentions, short SHAs."""

from __future__ import annotations

import re
from typing import Mapping

from .logging import get_logger

log = get_logger(__name__)

_MENTION_RE = re.compile(r"@(\w+)")
SHORT_SHA_LEN = 6


def extract_ticket_id(title: str, project: str = "FOR") -> str:
    """Return the first ``<project>-<digits>`` token in ``title``, or ""."""
    m = re.search(re.escape(project) + r"-\d+", title)
    if m is None:
        log.debug("No %s ticket id in title %r", project, title)
        return ""
    return m.group(0)


def resolve_mentions(text: str, mentions: Mapping[str, str]) -> str:
    """
    Replace each ``@handle`` whose handle is in ``mentions`` with ``<@ID>``.

    Unknown handles are left as written. Replacements are not re-scanned.
    """

    def _sub(m: re.Match) -> str:
        user_id = mentions.get(m.group(1))
        if user_id is None:
            log.debug("Unknown handle %s left unchanged", m.group(0))
            return m.group(0)
        return f"<@{user_id}>"

    return _MENTION_RE.sub(_sub, text)


def short_sha(sha: str) -> str:
    """First six characters of ``sha``; a shorter value is returned whole."""
    if len(sha) < SHORT_SHA_LEN:
        log.debug("Commit SHA %r shorter than %d characters", sha, SHORT_SHA_LEN)
    return sha[:SHORT_SHA_LEN]
