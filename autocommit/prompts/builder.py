"""Prompt Builder - Construct the explanation request for the LLM."""

from dataclasses import dataclass
from typing import Mapping, Union

from autocommit.git.diff_summary import DEFAULT_RENDER_LIMIT, DiffSummary, summarize_diff
from autocommit.git.status import ChangeSet

DiffInput = Union[DiffSummary, str]


@dataclass
class PromptConfig:
    """User-provided context that shapes the prompt."""
    hint: str | None = None
    max_lines_per_file: int = DEFAULT_RENDER_LIMIT


class ExplanationPromptBuilder:
    """Turns per-file diff summaries into one explanation request."""

    def build(
        self,
        summaries: Mapping[str, DiffInput],
        config: PromptConfig | None = None,
        changes: ChangeSet | None = None,
    ) -> str:
        config = config or PromptConfig()
        sections = [
            self._build_role_section(),
            self._build_overview_section(changes),
            self._build_changes_section(summaries, config),
            self._build_hints_section(config),
            self._build_instructions(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_role_section(self) -> str:
        return """You are a senior software engineer explaining a commit to the developers who will read it in git log.

Explain the purpose of the following code changes."""

    def _build_overview_section(self, changes: ChangeSet | None) -> str:
        if changes is None or (not changes.added and not changes.deleted):
            return ""
        lines = ["<files>"]
        if changes.added:
            lines.append(f"Added files: {', '.join(changes.added)}")
        if changes.modified:
            lines.append(f"Modified files: {', '.join(changes.modified)}")
        if changes.deleted:
            lines.append(f"Deleted files: {', '.join(changes.deleted)}")
        lines.append("</files>")
        return "\n".join(lines)

    def _build_changes_section(self, summaries: Mapping[str, DiffInput], config: PromptConfig) -> str:
        blocks = [
            self._build_file_block(path, diff, config.max_lines_per_file)
            for path, diff in summaries.items()
        ]
        return "\n\n".join(blocks)

    def _build_file_block(self, path: str, diff: DiffInput, limit: int) -> str:
        summary = summarize_diff(diff) if isinstance(diff, str) else diff
        return f"File: {path}\nChanges:\n{summary.render(limit)}"

    def _build_hints_section(self, config: PromptConfig) -> str:
        if not config.hint:
            return ""

        return f"""<context>
The developer provided this context about the changes:
"{config.hint}"

Use this to inform your explanation, but verify it matches the changes above.
</context>"""

    def _build_instructions(self) -> str:
        return """<instructions>
- Explain why these changes were made, not just what changed
- Be concise: a short paragraph or a few bullet points
- Use precise technical language
- Group related changes together
- No markdown headings, no code blocks, no preamble
</instructions>"""
