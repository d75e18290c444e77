"""Significance Ranker - Pick the few changed files worth naming in a title."""

from dataclasses import dataclass
from pathlib import PurePosixPath

from autocommit import MAX_RANKED_FILES
from autocommit.git.status import ChangeKind, FileChange

# Plain substrings, not globs: "app.log.py" is noise too.
NOISE_MARKERS: tuple[str, ...] = ('node_modules/', '.lock', '.log')

PRIORITY_EXTENSIONS: frozenset[str] = frozenset({
    '.js', '.jsx', '.ts', '.tsx', '.py',
    '.html', '.css', '.scss',
    '.json', '.yml', '.yaml', '.toml',
    '.md', '.gitignore',
})


def file_extension(path: str) -> str:
    """Lower-cased extension; a bare dotfile like `.gitignore` is its own."""
    name = PurePosixPath(path).name.lower()
    if name.startswith('.') and name.count('.') == 1:
        return name
    return PurePosixPath(name).suffix


@dataclass(frozen=True)
class RankedFile:
    path: str
    kind: ChangeKind

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        return file_extension(self.path)


def is_noise(path: str) -> bool:
    return any(marker in path for marker in NOISE_MARKERS)


def rank_files(changes: list[FileChange], limit: int = MAX_RANKED_FILES) -> list[RankedFile]:
    """Drop noise, then order priority extensions first and short paths first.

    `sorted` is stable, so equal keys keep their incoming order.
    """
    kept = [c for c in changes if not is_noise(c.path)]
    kept = sorted(kept, key=lambda c: (file_extension(c.path) not in PRIORITY_EXTENSIONS, len(c.path)))
    limit = max(min(limit, MAX_RANKED_FILES), 0)
    return [RankedFile(c.path, c.kind) for c in kept[:limit]]
