"""CLI Argument Parsing"""

import argparse
import argcomplete

from autocommit import __version__
from autocommit.config import VALID_MODES, VALID_PROVIDERS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='autocommit',
        description='Stage, describe and commit working tree changes',
        epilog='Example: autocommit --dry-run (show the message, commit nothing)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-C', '--cwd', type=str, metavar='DIR', help='Run inside DIR instead of the current directory')

    # Generation options
    parser.add_argument('--mode', type=str, choices=sorted(VALID_MODES), help='Commit body: AI explanation or raw diffs')
    parser.add_argument('--hint', type=str, metavar='TEXT', help='Add context: --hint "fixing the login bug"')

    # LLM options
    parser.add_argument('-p', '--provider', type=str, choices=sorted(VALID_PROVIDERS), help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')

    # Commit options
    parser.add_argument('--dry-run', action='store_true', help='Show the message without staging or committing')
    parser.add_argument('-y', '--yes', action='store_true', help='Commit without asking for confirmation')

    # Output options
    parser.add_argument('--no-copy', action='store_true', help='Do not copy the message to the clipboard')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, tokens used)')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Configure defaults')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
