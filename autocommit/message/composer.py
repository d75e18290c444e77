"""Message Composer - Merge title, explanation and diffs into the final message."""

from dataclasses import dataclass
from enum import Enum

from autocommit import MAX_DETAIL_LENGTH, MAX_SUBJECT_LENGTH
from autocommit.git.status import ChangeSet
from autocommit.message.title import truncate
from autocommit.result import Ok, Result


class ComposeMode(str, Enum):
    """What goes into the commit body."""
    NARRATIVE = 'narrative'  # the AI explanation only
    EVIDENCE = 'evidence'    # raw diff blocks, explanation on top when available


@dataclass(frozen=True)
class CommitMessage:
    """Title + extended body handed to `git commit`."""
    short_message: str
    detailed_message: str

    def as_text(self) -> str:
        if not self.detailed_message:
            return self.short_message
        return f"{self.short_message}\n\n{self.detailed_message}"


DEFAULT_MESSAGE = CommitMessage(
    short_message="Project update",
    detailed_message="Automated commit of pending changes.",
)

APOLOGY_MESSAGE = "Sorry, a detailed description could not be generated for these changes."


def fallback_message() -> CommitMessage:
    return DEFAULT_MESSAGE


def _explanation_text(explanation: Result[str] | None) -> str:
    if isinstance(explanation, Ok) and explanation.value and explanation.value.strip():
        return explanation.value.strip()
    return ""


def render_diff_blocks(diffs: dict[str, str], order: tuple[str, ...] | list[str] | None = None) -> str:
    """One fenced block per file, in `order` when given."""
    paths = list(order) if order is not None else list(diffs)
    blocks = []
    for path in paths:
        if path not in diffs:
            continue
        blocks.append(f"{path}\n```diff\n{diffs[path].rstrip()}\n```")
    return "\n\n".join(blocks)


def _render_file_listing(changes: ChangeSet) -> str:
    lines = []
    for label, paths in (("Added", changes.added), ("Modified", changes.modified), ("Deleted", changes.deleted)):
        if paths:
            lines.append(f"{label}: {', '.join(paths)}")
    return "\n".join(lines)


def _narrative_body(explanation: Result[str] | None, max_detail_length: int) -> str:
    text = _explanation_text(explanation)
    if not text:
        return APOLOGY_MESSAGE
    return truncate(text, max_detail_length)


def _evidence_body(explanation: Result[str] | None, diffs: dict[str, str], changes: ChangeSet | None) -> str:
    order = changes.modified if changes is not None else None
    evidence = render_diff_blocks(diffs, order)
    if not evidence and changes is not None:
        evidence = _render_file_listing(changes)
    parts = [p for p in (_explanation_text(explanation), evidence) if p]
    return "\n\n".join(parts) or APOLOGY_MESSAGE


def compose_message(
    title: str,
    explanation: Result[str] | None,
    diffs: dict[str, str] | None = None,
    mode: ComposeMode = ComposeMode.NARRATIVE,
    changes: ChangeSet | None = None,
    max_subject_length: int = MAX_SUBJECT_LENGTH,
    max_detail_length: int = MAX_DETAIL_LENGTH,
) -> CommitMessage:
    """Build the final message. Never raises on a failed explanation.

    A `Failure` explanation falls back per mode: narrative gets the apology
    line, evidence keeps its diff blocks.
    """
    max_subject_length = min(max_subject_length, MAX_SUBJECT_LENGTH)
    max_detail_length = min(max_detail_length, MAX_DETAIL_LENGTH)
    short = truncate(title.strip(), max_subject_length) or DEFAULT_MESSAGE.short_message

    if ComposeMode(mode) is ComposeMode.EVIDENCE:
        body = _evidence_body(explanation, diffs or {}, changes)
    else:
        body = _narrative_body(explanation, max_detail_length)

    return CommitMessage(short_message=short, detailed_message=body)


__all__ = [
    "ComposeMode",
    "CommitMessage",
    "DEFAULT_MESSAGE",
    "APOLOGY_MESSAGE",
    "compose_message",
    "fallback_message",
    "render_diff_blocks",
]
