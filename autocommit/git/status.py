"""Status Classifier - Parse `git status --porcelain` into a ChangeSet."""

from dataclasses import dataclass
from enum import Enum


class ChangeKind(str, Enum):
    """What happened to a file."""
    ADD = 'add'
    UPDATE = 'update'
    REMOVE = 'remove'


# Porcelain status letter -> kind. Anything else (R, C, U, ??) is dropped.
STATUS_CODES = {
    'A': ChangeKind.ADD,
    'M': ChangeKind.UPDATE,
    'D': ChangeKind.REMOVE,
}

# "XY path": two status characters, a space, then the path
PATH_OFFSET = 3


@dataclass(frozen=True)
class FileChange:
    """A single changed path tagged with its kind."""
    path: str
    kind: ChangeKind


@dataclass(frozen=True)
class ChangeSet:
    """Working tree changes grouped by kind, in status report order."""
    added: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.deleted)

    @property
    def total_files(self) -> int:
        return len(self.added) + len(self.modified) + len(self.deleted)

    def flatten(self) -> list[FileChange]:
        """Kind-tagged entries, always in added -> modified -> deleted order.

        The order is part of the output: the dominant-kind tie-break in the
        title depends on it.
        """
        return (
            [FileChange(p, ChangeKind.ADD) for p in self.added]
            + [FileChange(p, ChangeKind.UPDATE) for p in self.modified]
            + [FileChange(p, ChangeKind.REMOVE) for p in self.deleted]
        )


def classify_changes(status: str) -> ChangeSet:
    """Split a porcelain status report into added/modified/deleted paths.

    Lossy on purpose: renames, copies, untracked files and any line that
    doesn't fit the "XY path" shape are skipped without error.
    """
    groups: dict[ChangeKind, list[str]] = {kind: [] for kind in ChangeKind}
    seen: set[str] = set()

    for line in (status or '').split('\n'):
        if not line.strip() or len(line) <= PATH_OFFSET:
            continue
        kind = STATUS_CODES.get(line[0])
        if kind is None:
            continue
        path = line[PATH_OFFSET:].strip()
        if not path or path in seen:
            continue
        seen.add(path)
        groups[kind].append(path)

    return ChangeSet(
        added=tuple(groups[ChangeKind.ADD]),
        modified=tuple(groups[ChangeKind.UPDATE]),
        deleted=tuple(groups[ChangeKind.REMOVE]),
    )
