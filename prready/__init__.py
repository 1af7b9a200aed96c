"""
Pull-request "ready for review" notifier for Slack webhooks.

Typical use from a CI step is ``python -m prready``; the pieces below are
exposed for scripting:

    settings = Settings.from_env(EnvSnapshot())
    settings.validate()
    send(settings.webhook_url, build_message(settings, DEFAULT_MENTIONS))
"""

from .config import DEFAULT_MENTIONS, ConfigError, EnvSnapshot, MentionTable, Settings, load_mentions
from .fields import Field, select_fields
from .notify import DeliveryError, send
from .payload import Message, build_message

__all__ = [
    "DEFAULT_MENTIONS",
    "ConfigError",
    "DeliveryError",
    "EnvSnapshot",
    "Field",
    "MentionTable",
    "Message",
    "Settings",
    "build_message",
    "load_mentions",
    "select_fields",
    "send",
]
__version__ = "0.1.0"
