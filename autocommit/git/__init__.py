"""Git Operations Package"""

from autocommit.git.status import ChangeKind, ChangeSet, FileChange, classify_changes
from autocommit.git.diff_summary import DiffLine, DiffSummary, NO_CHANGES, summarize_diff
from autocommit.git.ranking import RankedFile, rank_files, file_extension, is_noise
from autocommit.git.repository import GitRepository, GitError, DIFF_UNAVAILABLE

__all__ = [
    "ChangeKind",
    "ChangeSet",
    "FileChange",
    "classify_changes",
    "DiffLine",
    "DiffSummary",
    "NO_CHANGES",
    "summarize_diff",
    "RankedFile",
    "rank_files",
    "file_extension",
    "is_noise",
    "GitRepository",
    "GitError",
    "DIFF_UNAVAILABLE",
]
