"""CLI Main Entry Point"""

import os
import sys

from autocommit.config import Config, load_config
from autocommit.git import GitRepository, GitError
from autocommit.message import CommitMessage
from autocommit.output import (
    CHECK,
    WARN,
    Spinner,
    bold,
    colorize_title,
    dim,
    print_error,
    print_info,
    print_success,
    print_warning,
    rule,
    success,
    warning,
)
from autocommit.pipeline import Generated, NoChanges, generate_commit_message

from autocommit.cli.args import parse_args
from autocommit.cli.commands import display_config, run_setup, run_install_completion
from autocommit.cli.utils import copy_to_clipboard, edit_message


def _display_message(message: CommitMessage):
    """Display commit message with horizontal rules and colored category."""
    text = message.as_text()
    colored = colorize_title(text)
    lines = colored.split('\n')
    width = min(max((len(line) for line in text.split('\n')), default=40), 80)
    print(f"\n{rule(width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(rule(width))


def _copy_and_report(message: CommitMessage, no_copy: bool):
    """Copy message to clipboard and print result."""
    if no_copy:
        return
    copied, reason = copy_to_clipboard(message.as_text())
    if copied:
        print(f"{success(CHECK)} Copied to clipboard!")
    else:
        print(f"{warning(WARN)} Could not copy to clipboard{': ' + reason if reason else ''}")


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.setup:
        return run_setup(), True
    return 0, False


def _apply_overrides(args, config: Config) -> Config:
    """Layer CLI args and environment over the config file.

    Precedence: CLI args > environment variables > config file
    """
    config.provider = args.provider or os.environ.get('AUTOCOMMIT_PROVIDER') or config.provider
    config.model = args.model or os.environ.get('AUTOCOMMIT_MODEL') or config.model
    if args.mode:
        config.mode = args.mode
    for warning_text in config.validate():
        print_warning(f"Config warning: {warning_text}")
    return config


def _report_fallbacks(outcome: Generated):
    if outcome.error:
        print_error(f"Error generating commit message: {outcome.error}")
        print(dim("  Using the default message instead."))
    if outcome.notice:
        print_warning(outcome.notice)
    if outcome.explanation_error:
        print_warning(f"Could not generate an explanation: {outcome.explanation_error}")


def _print_verbose_stats(args, is_pipe, outcome: Generated):
    """Print verbose timing and token statistics."""
    if not args.verbose or is_pipe:
        return
    timings = outcome.timings
    print()
    print(dim(f"  Files: {outcome.changes.total_files} (+{len(outcome.changes.added)} ~{len(outcome.changes.modified)} -{len(outcome.changes.deleted)})"))
    if outcome.prompt:
        print(dim(f"  Prompt: ~{len(outcome.prompt)//4} tokens ({len(outcome.prompt)} chars)"))
    print(dim(f"  Response: {outcome.tokens_used} tokens"))
    print(dim("  Timings: " + ", ".join(f"{k}={v:.2f}s" for k, v in timings.items())))


def _confirm(message: CommitMessage):
    """Ask before committing.

    Returns:
        tuple: (action, message) where action is 'commit' or 'abort'
    """
    while True:
        try:
            action = input(f"\n{dim('(e)dit, (n)o, or Enter to commit: ')}").strip().lower()
        except (KeyboardInterrupt, EOFError):
            return 'abort', message

        if action == '':
            return 'commit', message
        if action == 'n':
            return 'abort', message
        if action == 'e':
            edited = edit_message(message)
            if edited:
                message = edited
                _display_message(message)


def _autocommit_flow(args, config: Config) -> int:
    """Stage, generate, confirm and commit.

    Returns:
        int: Exit code
    """
    is_pipe = not sys.stdout.isatty()
    is_interactive = sys.stdin.isatty() and not is_pipe

    try:
        repo = GitRepository(args.cwd, timeout=config.timeout)
        if not args.dry_run:
            repo.stage_all()
        status = repo.status()
    except GitError as e:
        print_error(str(e))
        return 1

    with Spinner(f"Asking {config.provider}..."):
        outcome = generate_commit_message(status, repo.file_diff, config, hint=args.hint)

    if isinstance(outcome, NoChanges):
        print_info("No changes to commit.")
        return 0

    _report_fallbacks(outcome)
    _print_verbose_stats(args, is_pipe, outcome)
    message = outcome.message

    if is_pipe:
        print(message.as_text())
    else:
        _display_message(message)
        _copy_and_report(message, args.no_copy)

    if args.dry_run:
        return 0

    if not args.yes:
        if not is_interactive:
            print(dim("Changes are staged. Re-run with --yes to commit without confirmation."), file=sys.stderr)
            return 0
        action, message = _confirm(message)
        if action == 'abort':
            print(dim("Cancelled. Changes remain staged."))
            return 0

    try:
        repo.commit(message.short_message, message.detailed_message)
    except GitError as e:
        print_error(str(e))
        return 1

    if not is_pipe:
        print_success("Commit made successfully.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = _apply_overrides(args, load_config())
    return _autocommit_flow(args, config)


def main_cli():
    sys.exit(main())
