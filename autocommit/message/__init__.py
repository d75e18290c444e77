"""Commit Message Package"""

from autocommit.message.title import compose_title, derive_category, dominant_kind, kind_emoji
from autocommit.message.composer import (
    APOLOGY_MESSAGE,
    DEFAULT_MESSAGE,
    CommitMessage,
    ComposeMode,
    compose_message,
    fallback_message,
    render_diff_blocks,
)

__all__ = [
    "compose_title",
    "derive_category",
    "dominant_kind",
    "kind_emoji",
    "APOLOGY_MESSAGE",
    "DEFAULT_MESSAGE",
    "CommitMessage",
    "ComposeMode",
    "compose_message",
    "fallback_message",
    "render_diff_blocks",
]
