"""Git Repository - Thin subprocess wrapper for status, diff and commit."""

import subprocess
from pathlib import Path


class GitError(Exception):
    """Raised when git operations fail."""
    pass


# Substituted for a file whose diff could not be read
DIFF_UNAVAILABLE = "diff unavailable"


# Single-letter escapes git uses inside a quoted path
_C_ESCAPES = {'a': 0x07, 'b': 0x08, 't': 0x09, 'n': 0x0A, 'v': 0x0B, 'f': 0x0C, 'r': 0x0D, '"': 0x22, '\\': 0x5C}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a path ("my file.py", "caf\\303\\251.py").

    Unquoted paths come back unchanged. Octal escapes are raw bytes, so the
    result is decoded as UTF-8 once all of them are collected.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != '\\' or i + 1 == len(body):
            out += ch.encode('utf-8')
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1:i + 4]
        if len(octal) == 3 and all(c in '01234567' for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _C_ESCAPES:
            out.append(_C_ESCAPES[nxt])
            i += 2
        else:
            out += ('\\' + nxt).encode('utf-8')
            i += 2
    return out.decode('utf-8', errors='replace')


def _unquote_status_line(line: str) -> str:
    # "XY path"; rename lines ("R  a -> b") are left alone
    if len(line) <= 3 or ' -> ' in line:
        return line
    return line[:3] + unquote_path(line[3:])


class GitRepository:
    """Runs git inside one working directory."""

    def __init__(self, cwd: str | Path | None = None, timeout: float | None = None):
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.timeout = timeout
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except subprocess.TimeoutExpired:
            raise GitError(f"Git command timed out: git {' '.join(args)}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError(f"No git repository detected in {self.cwd}")

    def status(self) -> str:
        """Porcelain status with every path unquoted.

        Only trailing whitespace is stripped so the fixed column offsets of
        the first line survive. core.quotePath=false keeps non-ASCII names
        readable; names with spaces or quotes are still quoted by git and
        get unquoted here.
        """
        raw = self._run_git('-c', 'core.quotePath=false', 'status', '--porcelain').rstrip()
        return '\n'.join(_unquote_status_line(line) for line in raw.split('\n'))

    def file_diff(self, path: str, staged: bool = True) -> str:
        """Unified diff of one file, against the index when `staged`."""
        args = ['diff', '--cached', '--', path] if staged else ['diff', '--', path]
        return self._run_git(*args).strip()

    def stage_all(self) -> None:
        self._run_git('add', '-A')

    def commit(self, title: str, body: str = "") -> str:
        """Commit staged changes. Arguments go straight to git, no shell."""
        args = ['commit', '-m', title]
        if body.strip():
            args += ['-m', body]
        return self._run_git(*args).strip()
