"""
Auto Commit

Emoji-tagged commit messages from working tree changes, with an
AI-written explanation in the body.
"""

__version__ = "1.0.7"

# Centralized change tables - single source of truth
# Used by: message/title.py (emoji + icons), git/ranking.py (extensions)
KIND_EMOJI = {
    'add': '✨',
    'update': '🔧',
    'remove': '🗑️',
}
FALLBACK_EMOJI = '💡'

# Per-file icon shown in front of each name in the title
KIND_ICONS = {
    'add': '✨',
    'update': '🔧',
    'remove': '🗑️',
}

MAX_SUBJECT_LENGTH = 72
MAX_DETAIL_LENGTH = 1000
MAX_RANKED_FILES = 3
