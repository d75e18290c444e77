"""CLI Utility Functions"""

import os
import subprocess
import sys
import tempfile

from autocommit import MAX_SUBJECT_LENGTH
from autocommit.message import CommitMessage
from autocommit.message.title import truncate


# Tried in order; the first one that exists is used
CLIPBOARD_COMMANDS = {
    'win32': [['clip']],
    'darwin': [['pbcopy']],
    'linux': [['wl-copy'], ['xclip', '-selection', 'clipboard'], ['xsel', '--clipboard', '--input']],
}


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy the commit message to the system clipboard.

    Returns (copied, reason); reason is empty on success.
    """
    candidates = CLIPBOARD_COMMANDS.get(sys.platform, CLIPBOARD_COMMANDS['linux'])
    data = text.encode('utf-8')
    for command in candidates:
        try:
            subprocess.run(command, input=data, check=True, capture_output=True)
            return True, ""
        except FileNotFoundError:
            continue
        except (subprocess.CalledProcessError, OSError) as e:
            return False, f"{command[0]} failed: {e}"

    if sys.platform == 'linux':
        return False, "Install wl-clipboard, xclip or xsel"
    return False, "No clipboard tool found"


def split_message(text: str, max_subject_length: int = MAX_SUBJECT_LENGTH) -> CommitMessage | None:
    """First line is the title, the rest (after blank lines) the body."""
    lines = text.strip().split('\n')
    title = truncate(lines[0].strip(), max_subject_length)
    if not title:
        return None
    body = '\n'.join(lines[1:]).strip()
    return CommitMessage(short_message=title, detailed_message=body)


def edit_message(message: CommitMessage) -> CommitMessage | None:
    """Open message in user's editor. Returns edited message or None on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message.as_text())
        tmp.close()
        subprocess.run([editor, tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return split_message(edited) if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            # Log to stderr so temp files don't silently accumulate
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)
