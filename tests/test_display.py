"""
Tests for CLI output and the end-to-end command flow.

Shows sample output for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import re

import pytest

from autocommit.cli import main as cli_main
from autocommit.cli.main import _display_message, main
from autocommit.cli.utils import split_message
from autocommit.config import Config
from autocommit.git import GitError
from autocommit.llm.base import LLMClient, LLMResponse
from autocommit.message import DEFAULT_MESSAGE, CommitMessage
from autocommit import output

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FakeRepo:
    """GitRepository stand-in recording staging and commits."""

    status_text = "M  src/app.py\nA  README.md"
    diffs = {"src/app.py": "+def run(debug=False):"}
    init_error = None
    instances = []

    def __init__(self, cwd=None, timeout=None):
        if self.init_error:
            raise GitError(self.init_error)
        self.cwd = cwd
        self.staged = False
        self.commits = []
        FakeRepo.instances.append(self)

    def stage_all(self):
        self.staged = True

    def status(self):
        return self.status_text

    def file_diff(self, path, staged=True):
        return self.diffs.get(path, "")

    def commit(self, title, body=""):
        self.commits.append((title, body))
        return ""


class EchoClient(LLMClient):

    @property
    def name(self):
        return "Echo"

    def _complete(self, prompt):
        return LLMResponse(content="Adds a debug flag to run() for tracing.", tokens_used=7)


@pytest.fixture
def cli_env(monkeypatch):
    """Wire main() to fakes; returns the FakeRepo class for inspection."""
    FakeRepo.instances = []
    FakeRepo.init_error = None
    FakeRepo.status_text = "M  src/app.py\nA  README.md"
    for var in ("AUTOCOMMIT_PROVIDER", "AUTOCOMMIT_MODEL", "GEMINI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("AUTOCOMMIT_API_KEY", "test-key-123")
    monkeypatch.setattr(cli_main, "GitRepository", FakeRepo)
    monkeypatch.setattr(cli_main, "load_config", lambda: Config())
    monkeypatch.setattr("autocommit.pipeline.get_client", lambda *a, **kw: EchoClient())
    monkeypatch.setattr(cli_main, "copy_to_clipboard", lambda text: (True, ""))
    return FakeRepo


# ---------------------------------------------------------------------------
# Message display
# ---------------------------------------------------------------------------

class TestDisplayMessage:

    def test_title_and_body_printed(self, capsys):
        _display_message(CommitMessage("✨ Enhancement: ✨ app.py", "Adds a debug flag."))
        out = ANSI_RE.sub('', capsys.readouterr().out)

        assert "✨ Enhancement: ✨ app.py" in out
        assert "Adds a debug flag." in out
        assert out.count(output.RULE) >= 2

    def test_colorize_title_marks_category(self, monkeypatch):
        monkeypatch.setattr(output, "COLORS_ENABLED", True)
        colored = output.colorize_title("🔧 Configuration: 🔧 .gitignore\n\nbody")

        assert "\033[" in colored.split('\n')[0]
        assert ANSI_RE.sub('', colored) == "🔧 Configuration: 🔧 .gitignore\n\nbody"

    def test_colorize_title_plain_without_colors(self, monkeypatch):
        monkeypatch.setattr(output, "COLORS_ENABLED", False)
        assert output.colorize_title("✨ Update") == "✨ Update"


class TestSplitMessage:

    def test_title_and_body(self):
        assert split_message("Title\n\nBody line 1\nBody line 2") == CommitMessage("Title", "Body line 1\nBody line 2")

    def test_long_title_truncated(self):
        assert len(split_message("x" * 90).short_message) == 72

    def test_empty(self):
        assert split_message("   ") is None


# ---------------------------------------------------------------------------
# Command flow
# ---------------------------------------------------------------------------

class TestMainFlow:

    def test_dry_run_prints_message_without_committing(self, cli_env, capsys):
        assert main(["--dry-run", "--no-copy"]) == 0
        out = capsys.readouterr().out

        assert "✨ Enhancement: ✨ README.md, 🔧 app.py" in out
        assert "Adds a debug flag to run() for tracing." in out
        repo = cli_env.instances[0]
        assert repo.staged is False
        assert repo.commits == []

    def test_yes_stages_and_commits(self, cli_env):
        assert main(["--yes", "--no-copy"]) == 0
        repo = cli_env.instances[0]

        assert repo.staged is True
        assert repo.commits == [(
            "✨ Enhancement: ✨ README.md, 🔧 app.py",
            "Adds a debug flag to run() for tracing.",
        )]

    def test_non_interactive_without_yes_does_not_commit(self, cli_env, capsys):
        assert main(["--no-copy"]) == 0
        assert cli_env.instances[0].commits == []
        assert "--yes" in capsys.readouterr().err

    def test_no_changes(self, cli_env, capsys):
        cli_env.status_text = ""
        assert main(["--yes"]) == 0
        assert "No changes to commit." in capsys.readouterr().out
        assert cli_env.instances[0].commits == []

    def test_no_repository(self, cli_env, capsys):
        cli_env.init_error = "No git repository detected in /nowhere"
        assert main(["--yes"]) == 1
        assert "No git repository detected" in capsys.readouterr().err

    def test_missing_key_commits_default_message(self, cli_env, monkeypatch, capsys):
        monkeypatch.delenv("AUTOCOMMIT_API_KEY")
        assert main(["--yes", "--no-copy"]) == 0

        assert cli_env.instances[0].commits == [(DEFAULT_MESSAGE.short_message, DEFAULT_MESSAGE.detailed_message)]
        assert "No API key configured" in capsys.readouterr().err

    def test_evidence_mode_flag(self, cli_env, capsys):
        assert main(["--dry-run", "--no-copy", "--mode", "evidence"]) == 0
        out = capsys.readouterr().out
        assert "src/app.py\n```diff\n+def run(debug=False):\n```" in out

    def test_commit_failure_returns_error(self, cli_env, monkeypatch, capsys):
        def _fail(self, title, body=""):
            raise GitError("Git command failed: git commit")
        monkeypatch.setattr(FakeRepo, "commit", _fail)

        assert main(["--yes", "--no-copy"]) == 1
        assert "git commit" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Setup wizard
# ---------------------------------------------------------------------------

class TestSetupWizard:

    @pytest.fixture
    def saved(self, monkeypatch):
        from autocommit.cli import commands
        captured = {}

        def fake_save(config, global_config=True):
            captured["config"] = config
            return "~/.autocommitrc"

        monkeypatch.setattr(commands, "display_config", lambda: 0)
        monkeypatch.setattr(commands, "save_config", fake_save)
        return commands, captured

    def test_defaults_on_enter(self, saved, monkeypatch):
        commands, captured = saved
        answers = iter(["", "", ""])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        monkeypatch.setattr(commands.getpass, "getpass", lambda prompt="": "gm-key-123")

        assert commands.run_setup() == 0
        config = captured["config"]
        assert (config.provider, config.api_key, config.mode) == ("gemini", "gm-key-123", "narrative")

    def test_ollama_skips_key_prompt(self, saved, monkeypatch):
        commands, captured = saved
        answers = iter(["9", "3", "llama3.2:3b", "2"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

        def no_getpass(prompt=""):
            raise AssertionError("key prompt shown for a local provider")

        monkeypatch.setattr(commands.getpass, "getpass", no_getpass)

        commands.run_setup()
        config = captured["config"]
        assert (config.provider, config.model, config.mode) == ("ollama", "llama3.2:3b", "evidence")
        assert config.api_key is None
