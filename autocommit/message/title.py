"""Category & Title Composer - Deterministic emoji-tagged subject line."""

from autocommit import FALLBACK_EMOJI, KIND_EMOJI, KIND_ICONS, MAX_SUBJECT_LENGTH
from autocommit.git.ranking import RankedFile
from autocommit.git.status import ChangeKind, ChangeSet

IGNORE_EXTENSIONS = frozenset({'.gitignore'})
SCRIPT_EXTENSIONS = frozenset({'.py'})
WEB_EXTENSIONS = frozenset({'.js', '.jsx', '.ts', '.tsx', '.html', '.css', '.scss'})
DATA_EXTENSIONS = frozenset({'.json', '.yml', '.yaml', '.toml'})

# Checked top to bottom, first hit wins. Ignore files beat scripts even
# when both are present.
CATEGORY_RULES: list[tuple[frozenset[str], str]] = [
    (IGNORE_EXTENSIONS, "Configuration"),
    (SCRIPT_EXTENSIONS, "Enhancement"),
    (WEB_EXTENSIONS, "Development"),
    (DATA_EXTENSIONS, "Configuration"),
]
DEFAULT_CATEGORY = "Update"


def dominant_kind(changes: ChangeSet) -> ChangeKind | None:
    """Most frequent kind; ties go to whichever kind `flatten()` yields first."""
    counts: dict[ChangeKind, int] = {}
    for change in changes.flatten():
        counts[change.kind] = counts.get(change.kind, 0) + 1
    if not counts:
        return None
    # max() returns the first maximal item, and dicts keep insertion order
    return max(counts, key=counts.__getitem__)


def kind_emoji(kind: ChangeKind | None) -> str:
    if kind is None:
        return FALLBACK_EMOJI
    return KIND_EMOJI.get(kind.value, FALLBACK_EMOJI)


def derive_category(ranked: list[RankedFile]) -> str:
    extensions = {f.extension for f in ranked}
    for rule_extensions, category in CATEGORY_RULES:
        if extensions & rule_extensions:
            return category
    return DEFAULT_CATEGORY


def format_file_names(ranked: list[RankedFile]) -> str:
    return ", ".join(f"{KIND_ICONS.get(f.kind.value, FALLBACK_EMOJI)} {f.name}" for f in ranked)


def truncate(text: str, max_length: int) -> str:
    """Hard cut; may split a word or a file name."""
    return text[:max_length]


def compose_title(changes: ChangeSet, ranked: list[RankedFile], max_length: int = MAX_SUBJECT_LENGTH) -> str:
    emoji = kind_emoji(dominant_kind(changes))
    category = derive_category(ranked)
    title = f"{emoji} {category}"
    if ranked:
        title = f"{title}: {format_file_names(ranked)}"
    return truncate(title, min(max_length, MAX_SUBJECT_LENGTH))
