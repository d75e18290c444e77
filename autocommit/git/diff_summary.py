"""Diff Summarizer - Reduce a single-file unified diff to its content lines."""

from dataclasses import dataclass

NO_CHANGES = "no changes detected"
DEFAULT_RENDER_LIMIT = 5

# Prefix match only: a removed "-- comment" or added "++x" line is dropped too
METADATA_PREFIXES = ('diff --git', 'index', '+++', '---')


@dataclass(frozen=True)
class DiffLine:
    """One added or removed content line."""
    tag: str  # 'added' or 'removed'
    content: str

    def render(self) -> str:
        return f"{self.tag}: {self.content}"


@dataclass(frozen=True)
class DiffSummary:
    """Added/removed lines of one file with their tallies."""
    lines: tuple[DiffLine, ...] = ()
    lines_added: int = 0
    lines_removed: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.lines)

    def render(self, limit: int | None = DEFAULT_RENDER_LIMIT) -> str:
        """Text for the explanation prompt; only the first `limit` lines."""
        if not self.lines:
            return NO_CHANGES
        shown = self.lines if limit is None else self.lines[:limit]
        parts = [line.render() for line in shown]
        hidden = len(self.lines) - len(shown)
        if hidden > 0:
            parts.append(f"... {hidden} more lines")
        parts.append(f"(+{self.lines_added} -{self.lines_removed})")
        return "\n".join(parts)


def summarize_diff(diff: str | None) -> DiffSummary:
    """Collect `+`/`-` content lines, skipping headers, hunks and context."""
    lines = []
    added = removed = 0

    for raw in (diff or '').split('\n'):
        if raw.startswith(METADATA_PREFIXES):
            continue
        if raw.startswith('+'):
            lines.append(DiffLine('added', raw[1:].strip()))
            added += 1
        elif raw.startswith('-'):
            lines.append(DiffLine('removed', raw[1:].strip()))
            removed += 1

    return DiffSummary(lines=tuple(lines), lines_added=added, lines_removed=removed)
