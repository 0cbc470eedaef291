"""
Tests for CLI output and the end-to-end command flow.

Git and the model are replaced with fakes; prompts are answered through a
patched input(). Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import json
import re
import types

import pytest

import gitraven.cli.main as cli_main
from gitraven.cli.args import parse_args
from gitraven.cli.commands import display_config, display_types
from gitraven.config import Config
from gitraven.git import GitError, NoStagedChangesError
from gitraven.git.changes import FileChange, FileStatus, aggregate_changes
from gitraven.llm import LLMClient, LLMError, LLMResponse
from gitraven.output import format_file_change

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

ANALYSIS_JSON = json.dumps({
    "summary": "Add JWT validation",
    "suggestedType": "feat",
    "suggestedScope": "auth",
    "breakingChange": False,
    "confidence": 0.9,
})

COMMIT_JSON = json.dumps({
    "type": "feat",
    "scope": "auth",
    "description": "implement JWT validation",
    "body": "Validate signatures before trusting claims.",
    "breakingChange": False,
})

EXPECTED_MESSAGE = "feat(auth): implement JWT validation\n\nValidate signatures before trusting claims."


# ---------------------------------------------------------------------------
# Fakes and fixtures
# ---------------------------------------------------------------------------

class FakeRepo:
    """Stands in for GitAnalyzer."""

    def __init__(self, summary, staged=True, unstaged=True, push_error=None, staged_error=None):
        self.summary = summary
        self.staged_error = staged_error
        self.staged = staged
        self.unstaged = unstaged
        self.push_error = push_error
        self.committed = []
        self.pushed = False
        self.staged_all = False

    def is_git_repository(self):
        return True

    def get_staged_changes(self):
        if self.staged_error:
            raise self.staged_error
        if not self.staged:
            raise NoStagedChangesError()
        return self.summary

    def has_unstaged_changes(self):
        return self.unstaged

    def stage_all(self):
        self.staged_all = True
        self.staged = True

    def commit(self, message):
        self.committed.append(message)

    def push(self):
        if self.push_error:
            raise GitError(f"Failed to push changes: {self.push_error}")
        self.pushed = True

    def current_branch_name(self):
        return "main"


class ScriptedClient(LLMClient):

    def __init__(self, responses):
        self.responses = list(responses)

    @property
    def name(self) -> str:
        return "Scripted"

    def complete(self, system_prompt, user_prompt, model=None, max_tokens=500, temperature=0.3):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return LLMResponse(content=response)


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def summary():
    return aggregate_changes([
        FileChange(path="src/auth.py", status=FileStatus.MODIFIED, insertions=12, deletions=3),
        FileChange(path="src/jwt.py", status=FileStatus.ADDED, insertions=40, deletions=0),
    ])


@pytest.fixture
def answers(monkeypatch):
    """Feed scripted answers to input(); returns the list of prompts seen."""
    prompts = []

    def _install(*replies):
        queue = list(replies)

        def _input(prompt=""):
            prompts.append(prompt)
            if not queue:
                raise EOFError
            return queue.pop(0)

        monkeypatch.setattr("builtins.input", _input)
        return prompts
    return _install


@pytest.fixture
def run_cli(monkeypatch):
    """Run main() against a FakeRepo and a scripted model."""
    def _run(argv, repo, responses=(ANALYSIS_JSON, COMMIT_JSON)):
        client = ScriptedClient(responses)
        monkeypatch.setattr(cli_main, "GitAnalyzer", lambda: repo)
        monkeypatch.setattr(cli_main, "get_client", lambda config: client)
        monkeypatch.setattr(cli_main, "load_env_files", lambda: None)
        monkeypatch.setattr(cli_main, "load_config", lambda: Config())
        return cli_main.main(argv)
    return _run


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

class TestFileDisplay:

    @pytest.mark.parametrize("file, expected", [
        (FileChange(path="a.py", status=FileStatus.ADDED, insertions=3), "+ a.py (+3/-0)"),
        (FileChange(path="b.py", status=FileStatus.MODIFIED, insertions=1, deletions=2), "~ b.py (+1/-2)"),
        (FileChange(path="c.py", status=FileStatus.DELETED, deletions=9), "- c.py (+0/-9)"),
    ])
    def test_status_symbols(self, strip_ansi, file, expected):
        assert strip_ansi(format_file_change(file)).strip() == expected

    def test_renamed_shows_both_paths(self, strip_ansi):
        file = FileChange(path="new.py", status=FileStatus.RENAMED, old_path="old.py")
        line = strip_ansi(format_file_change(file))
        assert "old.py" in line
        assert "new.py" in line

    def test_file_list(self, capsys, strip_ansi, summary):
        cli_main._display_file_list(summary)
        out = strip_ansi(capsys.readouterr().out)

        assert "Staged changes:" in out
        assert "src/auth.py (+12/-3)" in out
        assert "src/jwt.py (+40/-0)" in out

    def test_message_header_first(self, capsys, strip_ansi):
        cli_main._display_message(EXPECTED_MESSAGE)
        out = strip_ansi(capsys.readouterr().out)

        assert "feat(auth): implement JWT validation" in out
        assert "Validate signatures before trusting claims." in out
        assert out.index("feat(auth)") < out.index("Validate signatures")


class TestEntryPoint:

    def test_cli_main_is_the_module(self):
        assert isinstance(cli_main, types.ModuleType)
        assert callable(cli_main.main)

    def test_package_does_not_shadow_submodule(self):
        import gitraven.cli
        assert gitraven.cli.main is cli_main


class TestInfoCommands:

    def test_types(self, capsys, strip_ansi):
        assert display_types() == 0
        out = strip_ansi(capsys.readouterr().out)
        assert "feat" in out
        assert "revert" in out
        assert "Reverts a previous commit" in out

    def test_config_hides_api_key(self, capsys, strip_ansi):
        display_config(Config(provider="claude", api_key="sk-very-secret"))
        out = strip_ansi(capsys.readouterr().out)

        assert "claude" in out
        assert "Set" in out
        assert "sk-very-secret" not in out


class TestParseArgs:

    def test_all_implies_auto_stage_and_push(self):
        args = parse_args(["--all"])
        assert args.auto_stage is True
        assert args.push is True

    def test_no_push_wins(self):
        args = parse_args(["--all", "--no-push"])
        assert args.push is False

    def test_generation_options(self):
        args = parse_args(["-p", "context", "-t", "fix", "-s", "api", "-m", "mistral:7b", "-d"])
        assert args.prompt == "context"
        assert args.type == "fix"
        assert args.scope == "api"
        assert args.model == "mistral:7b"
        assert args.dry_run is True

    def test_rejects_unknown_type(self):
        with pytest.raises(SystemExit):
            parse_args(["-t", "feature"])


# ---------------------------------------------------------------------------
# End-to-end flow
# ---------------------------------------------------------------------------

class TestGenerateFlow:

    def test_dry_run_does_not_commit(self, capsys, strip_ansi, run_cli, summary):
        repo = FakeRepo(summary)

        assert run_cli(["--dry-run"], repo) == 0
        out = strip_ansi(capsys.readouterr().out)

        assert "feat(auth): implement JWT validation" in out
        assert "Dry run mode" in out
        assert repo.committed == []

    def test_yes_commits_without_prompt(self, run_cli, answers, summary):
        prompts = answers()
        repo = FakeRepo(summary)

        assert run_cli(["--yes"], repo) == 0
        assert repo.committed == [EXPECTED_MESSAGE]
        assert prompts == []

    def test_confirm_then_commit(self, run_cli, answers, summary):
        answers("y")
        repo = FakeRepo(summary)

        assert run_cli([], repo) == 0
        assert repo.committed == [EXPECTED_MESSAGE]

    def test_declined_confirmation(self, capsys, run_cli, answers, summary):
        answers("n")
        repo = FakeRepo(summary)

        assert run_cli([], repo) == 0
        assert repo.committed == []
        assert "Cancelled" in capsys.readouterr().out

    def test_clean_tree_is_an_error(self, capsys, run_cli, summary):
        repo = FakeRepo(summary, staged=False, unstaged=False)

        assert run_cli([], repo) == 1
        assert "Working directory is clean" in capsys.readouterr().err

    def test_only_binary_staged_is_reported(self, capsys, run_cli, summary):
        repo = FakeRepo(summary, staged_error=GitError(
            "Only binary files are staged. There are no text changes to describe."
        ))

        assert run_cli([], repo) == 1
        err = capsys.readouterr().err
        assert "Only binary files are staged" in err
        assert "Please stage your changes" not in err
        assert repo.committed == []

    def test_auto_stage(self, run_cli, summary):
        repo = FakeRepo(summary, staged=False)

        assert run_cli(["--auto-stage", "--yes"], repo) == 0
        assert repo.staged_all is True
        assert repo.committed == [EXPECTED_MESSAGE]

    def test_offer_to_stage_declined(self, capsys, run_cli, answers, summary):
        answers("n")
        repo = FakeRepo(summary, staged=False)

        assert run_cli([], repo) == 1
        assert repo.staged_all is False
        assert "No staged changes found" in capsys.readouterr().err

    def test_offer_to_stage_accepted(self, run_cli, answers, summary):
        answers("y", "y")
        repo = FakeRepo(summary, staged=False)

        assert run_cli([], repo) == 0
        assert repo.staged_all is True
        assert repo.committed == [EXPECTED_MESSAGE]

    def test_all_pushes_without_asking(self, run_cli, answers, summary):
        prompts = answers()
        repo = FakeRepo(summary)

        assert run_cli(["--all", "--yes"], repo) == 0
        assert repo.pushed is True
        assert prompts == []

    def test_push_asks_by_default(self, run_cli, answers, summary):
        answers("n")
        repo = FakeRepo(summary)

        assert run_cli(["--push", "--yes"], repo) == 0
        assert repo.committed == [EXPECTED_MESSAGE]
        assert repo.pushed is False

    def test_push_failure_keeps_commit(self, capsys, strip_ansi, run_cli, summary):
        repo = FakeRepo(summary, push_error="fatal: The current branch has no upstream branch.")

        assert run_cli(["--all", "--yes"], repo) == 0
        out = strip_ansi(capsys.readouterr().out)

        assert repo.committed == [EXPECTED_MESSAGE]
        assert "Push failed" in out
        assert "git push origin main" in out
        assert "git push --set-upstream origin main" in out

    def test_model_failure(self, capsys, run_cli, summary):
        repo = FakeRepo(summary)

        assert run_cli(["--yes"], repo, responses=[LLMError("service unavailable")]) == 1
        assert "AI analysis failed: service unavailable" in capsys.readouterr().err
        assert repo.committed == []

    def test_malformed_model_output_still_commits(self, run_cli, summary):
        repo = FakeRepo(summary)

        assert run_cli(["--yes"], repo, responses=["oops", "nope"]) == 0
        assert repo.committed == ["chore: code changes detected"]

    def test_interactive_cancel(self, capsys, run_cli, answers, summary):
        answers("q")
        repo = FakeRepo(summary)

        assert run_cli(["-i"], repo) == 0
        assert repo.committed == []
        assert "Cancelled" in capsys.readouterr().out

    def test_interactive_edit(self, monkeypatch, run_cli, answers, summary):
        answers("e")
        monkeypatch.setattr(cli_main, "edit_message", lambda message: "fix(auth): reject unsigned tokens")
        repo = FakeRepo(summary)

        assert run_cli(["-i"], repo) == 0
        assert repo.committed == ["fix(auth): reject unsigned tokens"]

    def test_interactive_regenerate(self, run_cli, answers, summary):
        answers("r", "c")
        repo = FakeRepo(summary)
        responses = [ANALYSIS_JSON, "garbage", ANALYSIS_JSON, COMMIT_JSON]

        assert run_cli(["-i"], repo, responses=responses) == 0
        assert repo.committed == [EXPECTED_MESSAGE]
