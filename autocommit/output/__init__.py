"""Terminal output: colours, status lines and the spinner shown while waiting on a provider."""

import os
import re
import sys
import threading


class Colors:
    """ANSI escape codes."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'


def _enable_windows_ansi() -> bool:
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
        return True
    except Exception:
        return False


def _probe_terminal(stream=sys.stdout) -> tuple[bool, bool]:
    """(colours, unicode) support for the given stream.

    NO_COLOR wins over FORCE_COLOR; a non-tty never gets colours unless forced.
    """
    encoding = getattr(stream, 'encoding', None) or 'utf-8'
    try:
        '✓⠋'.encode(encoding)
        unicode_ok = True
    except (UnicodeEncodeError, LookupError):
        unicode_ok = False

    if os.environ.get('NO_COLOR'):
        return False, unicode_ok
    if os.environ.get('FORCE_COLOR'):
        return True, unicode_ok
    if not getattr(stream, 'isatty', lambda: False)():
        return False, unicode_ok
    if sys.platform == 'win32':
        return _enable_windows_ansi(), unicode_ok
    return True, unicode_ok


COLORS_ENABLED, UNICODE_ENABLED = _probe_terminal()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
RULE = '─' if UNICODE_ENABLED else '-'


def _paint(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return ''.join(codes) + text + Colors.RESET


def success(text: str) -> str:
    return _paint(text, Colors.GREEN)


def error(text: str) -> str:
    return _paint(text, Colors.RED)


def warning(text: str) -> str:
    return _paint(text, Colors.YELLOW)


def info(text: str) -> str:
    return _paint(text, Colors.CYAN)


def dim(text: str) -> str:
    return _paint(text, Colors.DIM)


def bold(text: str) -> str:
    return _paint(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


def print_info(message: str) -> None:
    print(f"{info('i')} {message}")


def rule(width: int) -> str:
    """A dimmed horizontal line used to frame the proposed message."""
    return dim(RULE * max(width, 1))


# Title category -> colour; unknown categories stay uncoloured
CATEGORY_COLORS = {
    'Enhancement': Colors.GREEN,
    'Development': Colors.CYAN,
    'Configuration': Colors.YELLOW,
    'Update': Colors.MAGENTA,
}

# "<emoji> <Category>" optionally followed by ": files"
_TITLE_RE = re.compile(r'^(\S+ )(\w+)(:|$)')


def colorize_title(message: str) -> str:
    """Colour the category word on the first line of a commit message."""
    if not COLORS_ENABLED:
        return message
    title, sep, rest = message.partition('\n')
    match = _TITLE_RE.match(title)
    if match and match.group(2) in CATEGORY_COLORS:
        start, end = match.span(2)
        category = _paint(match.group(2), Colors.BOLD, CATEGORY_COLORS[match.group(2)])
        title = title[:start] + category + title[end:]
    return title + sep + rest


class Spinner:
    """Context manager that animates a label on stdout while a provider call runs.

    Does nothing when stdout is not a terminal, so piped output stays clean.
    """
    FRAMES_UNICODE = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏'
    FRAMES_ASCII = '-\\|/'
    INTERVAL = 0.08

    def __init__(self, label: str = ''):
        self.label = label
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII
        self._stop = threading.Event()
        self._thread = None

    def _animate(self):
        tick = 0
        while not self._stop.is_set():
            frame = self._frames[tick % len(self._frames)]
            print(f"\r\033[K{frame} {dim(self.label)}", end='', flush=True)
            tick += 1
            self._stop.wait(self.INTERVAL)

    def __enter__(self):
        if sys.stdout.isatty():
            self._stop.clear()
            self._thread = threading.Thread(target=self._animate, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc):
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
            print('\r\033[K', end='', flush=True)
        return False


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "WARN",
    "success", "error", "warning", "info", "dim", "bold", "rule",
    "print_success", "print_error", "print_warning", "print_info",
    "CATEGORY_COLORS", "colorize_title", "Spinner",
]
