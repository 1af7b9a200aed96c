# prready/config.py
"""
Environment snapshot, settings and the mention table.

The CI job hands everything to prready through environment variables. This
module reads them once into an immutable :class:`Settings` value and checks
the two required inputs (webhook URL and message text).

The mention table maps chat handles to platform user ids. A default table is
built in; a YAML file can replace it (see [configs/mentions.yaml](configs/mentions.yaml)):

    users:
      - id: U01FFMD8P7E
        handles: [alex, Alex, twigs67]
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

import yaml

from .logging import get_logger

log = get_logger(__name__)

ENV_SLACK_WEBHOOK = "SLACK_WEBHOOK"
ENV_SLACK_ICON = "SLACK_ICON"
ENV_SLACK_ICON_EMOJI = "SLACK_ICON_EMOJI"
ENV_SLACK_CHANNEL = "SLACK_CHANNEL"
ENV_SLACK_TITLE = "SLACK_TITLE"
ENV_SLACK_MESSAGE = "SLACK_MESSAGE"
ENV_SLACK_COLOR = "SLACK_COLOR"
ENV_SLACK_USERNAME = "SLACK_USERNAME"
ENV_SLACK_FOOTER = "SLACK_FOOTER"
ENV_SLACK_LINK_NAMES = "SLACK_LINK_NAMES"
ENV_GITHUB_ACTOR = "GITHUB_ACTOR"
ENV_SITE_NAME = "SITE_NAME"
ENV_SITE_TITLE = "SITE_TITLE"
ENV_HOST_NAME = "HOST_NAME"
ENV_HOST_TITLE = "HOST_TITLE"
ENV_MINIMAL = "MSG_MINIMAL"
ENV_PR_TITLE = "PR_TITLE"
ENV_PR_NUMBER = "PR_NUMBER"
ENV_PR_BODY = "PR_BODY"
ENV_JIRA_BASE_URL = "JIRA_BASE_URL"
ENV_JIRA_PROJECT = "JIRA_PROJECT"
ENV_MENTIONS_FILE = "SLACK_MENTIONS_FILE"
ENV_ATTACHMENT = "MSG_ATTACHMENT"

DEFAULT_JIRA_BASE_URL = "https://makersoftware.atlassian.net/browse/"
DEFAULT_JIRA_PROJECT = "FOR"
# GitHub reports the workflow file path as the name when `name:` is missing.
WORKFLOW_PATH_PREFIX = ".github"
WORKFLOW_FALLBACK_NAME = "Link to action run"


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


class EnvSnapshot:
    """Read-only copy of the process environment taken at startup."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(os.environ if environ is None else environ)

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def get(self, name: str) -> str:
        """Value of ``name``, or an empty string when it is not set."""
        return self._data.get(name, "")

    def get_or(self, name: str, default: str) -> str:
        """Value of ``name`` if present (even when empty), else ``default``."""
        if name in self._data:
            return self._data[name]
        return default


@dataclass(frozen=True)
class Settings:
    """Every input prready consumes, as plain strings."""

    webhook_url: str = ""
    username: str = ""
    icon_url: str = ""
    icon_emoji: str = ""
    channel: str = ""
    link_names: str = ""
    title: str = ""
    message: str = ""
    message_or_eom: str = "EOM"
    color: str = ""
    footer: str = ""
    actor: str = ""
    site_name: str = ""
    site_title: str = ""
    host_name: str = ""
    host_title: str = ""
    minimal: str = ""
    pr_title: str = ""
    pr_number: str = ""
    pr_body: str = ""
    repository: str = ""
    server_url: str = ""
    ref: str = ""
    event_name: str = ""
    workflow: str = ""
    sha: str = ""
    jira_base_url: str = DEFAULT_JIRA_BASE_URL
    jira_project: str = DEFAULT_JIRA_PROJECT
    mentions_file: str = ""
    attach_fields: bool = False

    @classmethod
    def from_env(cls, env: EnvSnapshot) -> "Settings":
        workflow = env.get("GITHUB_WORKFLOW")
        if workflow.startswith(WORKFLOW_PATH_PREFIX):
            log.debug("Workflow has no name (%s); using %r", workflow, WORKFLOW_FALLBACK_NAME)
            workflow = WORKFLOW_FALLBACK_NAME

        return cls(
            webhook_url=env.get(ENV_SLACK_WEBHOOK),
            username=env.get(ENV_SLACK_USERNAME),
            icon_url=env.get(ENV_SLACK_ICON),
            icon_emoji=env.get(ENV_SLACK_ICON_EMOJI),
            channel=env.get(ENV_SLACK_CHANNEL),
            link_names=env.get(ENV_SLACK_LINK_NAMES),
            title=env.get(ENV_SLACK_TITLE),
            message=env.get(ENV_SLACK_MESSAGE),
            message_or_eom=env.get_or(ENV_SLACK_MESSAGE, "EOM"),
            color=env.get(ENV_SLACK_COLOR),
            footer=env.get(ENV_SLACK_FOOTER),
            actor=env.get(ENV_GITHUB_ACTOR),
            site_name=env.get(ENV_SITE_NAME),
            site_title=env.get(ENV_SITE_TITLE),
            host_name=env.get(ENV_HOST_NAME),
            host_title=env.get(ENV_HOST_TITLE),
            minimal=env.get(ENV_MINIMAL),
            pr_title=env.get(ENV_PR_TITLE),
            pr_number=env.get(ENV_PR_NUMBER),
            pr_body=env.get(ENV_PR_BODY),
            repository=env.get("GITHUB_REPOSITORY"),
            server_url=env.get("GITHUB_SERVER_URL"),
            ref=env.get("GITHUB_REF"),
            event_name=env.get("GITHUB_EVENT_NAME"),
            workflow=workflow,
            sha=env.get("GITHUB_SHA"),
            jira_base_url=env.get(ENV_JIRA_BASE_URL) or DEFAULT_JIRA_BASE_URL,
            jira_project=env.get(ENV_JIRA_PROJECT) or DEFAULT_JIRA_PROJECT,
            mentions_file=env.get(ENV_MENTIONS_FILE),
            attach_fields=env.get(ENV_ATTACHMENT).strip().lower() == "true",
        )

    def validate(self) -> None:
        """Raise ConfigError unless both the webhook URL and message are set."""
        if not self.webhook_url:
            raise ConfigError("URL is required")
        if not self.message:
            raise ConfigError("Message is required")

    @property
    def repo_url(self) -> str:
        return f"{self.server_url}/{self.repository}"

    @property
    def pull_request_url(self) -> str:
        return f"{self.repo_url}/pull/{self.pr_number}"

    @property
    def avatar_url(self) -> str:
        return f"{self.server_url}/{self.actor}.png?size=32"


# --------------------------------------------------------------------------- #
# Mention table
# --------------------------------------------------------------------------- #


class MentionTable(Mapping[str, str]):
    """Immutable, case-sensitive handle → user id mapping."""

    def __init__(self, entries: Mapping[str, str]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, handle: str) -> str:
        return self._entries[handle]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MentionTable({len(self)} handles)"

    @classmethod
    def from_users(cls, users: Mapping[str, List[str]]) -> "MentionTable":
        """Build from ``{user_id: [handle, alias, ...]}``."""
        return cls({h: uid for uid, handles in users.items() for h in handles})


DEFAULT_MENTIONS = MentionTable.from_users(
    {
        "U01FFMD8P7E": ["alex", "Alex", "twigs67"],
        "U058HUUKZ6U": ["brad", "Brad", "dvrs-brad"],
        "U061W1T6L0Y": ["josh", "Josh", "skyfriends"],
        "U03HRTQ0LKW": ["bryer", "Bryer", "bryercowan"],
    }
)


def _validate_user(idx: int, u: Any) -> None:
    if not isinstance(u, dict):
        raise ConfigError(f"users[{idx}] must be a mapping, got {type(u).__name__}")
    if "id" not in u or not isinstance(u["id"], str) or not u["id"].strip():
        raise ConfigError(f"users[{idx}].id must be a non-empty string")
    handles = u.get("handles")
    if not isinstance(handles, list) or not handles:
        raise ConfigError(f"users[{idx}].handles must be a non-empty list")
    for j, h in enumerate(handles):
        if not isinstance(h, str) or not h.strip():
            raise ConfigError(f"users[{idx}].handles[{j}] must be a non-empty string")


def _validate_mentions(data: Any) -> MentionTable:
    if not isinstance(data, dict) or "users" not in data:
        raise ConfigError('Missing top-level "users" key')
    users = data["users"]
    if not isinstance(users, list):
        raise ConfigError('"users" must be a list')

    entries: Dict[str, str] = {}
    for i, u in enumerate(users):
        _validate_user(i, u)
        for h in u["handles"]:
            handle = h.strip()
            previous = entries.get(handle)
            if previous is not None and previous != u["id"]:
                raise ConfigError(f"users[{i}]: handle {handle!r} already maps to {previous}")
            entries[handle] = u["id"].strip()
    return MentionTable(entries)


def load_mentions(path: Union[str, Path]) -> MentionTable:
    """Load and validate a mention table from YAML.

    Raises:
        ConfigError for structural problems or a file that cannot be read.
        FileNotFoundError if path does not exist.
        yaml.YAMLError for YAML syntax problems.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Mention file not found: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read mention file {p}: {e}") from e

    table = _validate_mentions(data)
    log.debug("Loaded %d handles from %s", len(table), p)
    return table
