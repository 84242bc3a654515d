"""Tests for the minigit command-line interface.

Drives the click command group through CliRunner inside a temporary
working directory.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - click.testing: CLI runner
    - minigit_cli.main: Module under test
"""
from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from minigit_cli.main import cli
from minigit_core.repository import Repository


# ---- Fixtures ------------------------------------------------------------------------------------------------


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def workdir(temp_repo_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory set as the current directory."""
    monkeypatch.chdir(temp_repo_dir)
    return temp_repo_dir


@pytest.fixture
def cli_repo(runner: CliRunner, workdir: Path) -> Path:
    """Repository initialized and committed through the CLI."""
    (workdir / "notes.txt").write_text("hello\n")
    assert runner.invoke(cli, ["init"]).exit_code == 0
    assert runner.invoke(cli, ["add", "notes.txt"]).exit_code == 0
    assert runner.invoke(cli, ["commit", "-m", "Initial commit"]).exit_code == 0
    return workdir


# ---- Init Tests ---------------------------------------------------------------------------------------------


class TestInitCommand:
    """Tests for `minigit init`."""

    def test_init_creates_repository(self, runner: CliRunner, workdir: Path) -> None:
        """Test init in the current directory."""
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "Initialized empty MiniGit repository" in result.output
        assert Repository(workdir).is_valid()

    def test_init_twice_is_reported(self, runner: CliRunner, workdir: Path) -> None:
        """Test re-running init reports the existing repository."""
        runner.invoke(cli, ["init"])

        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "already initialized" in result.output

    def test_init_with_path(self, runner: CliRunner, workdir: Path) -> None:
        """Test init into a named directory."""
        result = runner.invoke(cli, ["init", "project"])

        assert result.exit_code == 0
        assert (workdir / "project" / ".minigit" / "HEAD").is_file()


# ---- Commit Workflow Tests ----------------------------------------------------------------------------------


class TestCommitWorkflow:
    """Tests for add, commit, log and status."""

    def test_add_reports_staged_path(self, runner: CliRunner, workdir: Path) -> None:
        """Test add prints the staged path."""
        runner.invoke(cli, ["init"])
        (workdir / "a.txt").write_text("a")

        result = runner.invoke(cli, ["add", "a.txt"])

        assert result.exit_code == 0
        assert "Added 'a.txt' to staging area." in result.output

    def test_add_missing_file_fails(self, runner: CliRunner, workdir: Path) -> None:
        """Test add of a file that does not exist."""
        runner.invoke(cli, ["init"])

        result = runner.invoke(cli, ["add", "ghost.txt"])

        assert result.exit_code == 1
        assert "Add failed" in result.output

    def test_commit_advances_branch(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test commit moves main to a full-length commit id."""
        head = Repository(cli_repo).resolve_head()

        assert head is not None
        assert len(head) == 40

    def test_commit_without_staged_fails(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test commit with an empty staging area."""
        result = runner.invoke(cli, ["commit", "-m", "Nothing"])

        assert result.exit_code == 1
        assert "No files staged for commit" in result.output

    def test_status_shows_branch_and_staged(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test status lists the branch and staged entries."""
        (cli_repo / "new.txt").write_text("new")
        runner.invoke(cli, ["add", "new.txt"])

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "main" in result.output
        assert "new.txt" in result.output

    def test_log_lists_commits(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test log shows each commit message newest first."""
        (cli_repo / "notes.txt").write_text("second\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", "Second commit"])

        result = runner.invoke(cli, ["log"])

        assert result.exit_code == 0
        assert result.output.index("Second commit") < result.output.index("Initial commit")
        assert result.output.count("Commit: ") == 2

    def test_log_limit(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test log -n limits output."""
        (cli_repo / "notes.txt").write_text("second\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", "Second commit"])

        result = runner.invoke(cli, ["log", "-n", "1"])

        assert "Second commit" in result.output
        assert "Initial commit" not in result.output


# ---- Branch and Checkout Tests ------------------------------------------------------------------------------


class TestBranchCommands:
    """Tests for branch and checkout."""

    def test_branch_create_and_list(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test creating then listing branches."""
        created = runner.invoke(cli, ["branch", "dev"])
        listed = runner.invoke(cli, ["branch"])

        assert created.exit_code == 0
        assert "Created new branch 'dev'" in created.output
        assert "* main" in listed.output
        assert "dev" in listed.output

    def test_branch_duplicate_fails(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test creating an existing branch."""
        result = runner.invoke(cli, ["branch", "main"])

        assert result.exit_code == 1
        assert "Branch operation failed" in result.output

    def test_branch_before_commit_fails(self, runner: CliRunner, workdir: Path) -> None:
        """Test branching in an empty repository."""
        runner.invoke(cli, ["init"])

        result = runner.invoke(cli, ["branch", "dev"])

        assert result.exit_code == 1

    def test_checkout_restores_files(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test checkout of a branch rewrites working files."""
        runner.invoke(cli, ["branch", "dev"])
        (cli_repo / "notes.txt").write_text("changed\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", "Change"])

        result = runner.invoke(cli, ["checkout", "dev"])

        assert result.exit_code == 0
        assert "Checked out branch: dev" in result.output
        assert (cli_repo / "notes.txt").read_text() == "hello\n"

    def test_checkout_unknown_fails(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test checkout of an unknown name."""
        result = runner.invoke(cli, ["checkout", "nowhere"])

        assert result.exit_code == 1
        assert "Commit not found for: nowhere" in result.output


# ---- Merge and Diff Tests -----------------------------------------------------------------------------------


class TestMergeAndDiff:
    """Tests for merge and diff."""

    def test_merge_conflict(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test merging divergent edits reports a conflict."""
        runner.invoke(cli, ["branch", "dev"])
        runner.invoke(cli, ["checkout", "dev"])
        (cli_repo / "notes.txt").write_text("dev\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", "Dev edit"])
        runner.invoke(cli, ["checkout", "main"])
        (cli_repo / "notes.txt").write_text("main\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", "Main edit"])

        result = runner.invoke(cli, ["merge", "dev"])

        assert result.exit_code == 0
        assert "CONFLICT: both modified notes.txt" in result.output
        assert (cli_repo / "notes.txt").read_text().startswith("<<<<<<< current\n")

    def test_merge_unknown_branch_fails(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test merging a missing branch."""
        result = runner.invoke(cli, ["merge", "ghost"])

        assert result.exit_code == 1
        assert "Merge failed" in result.output

    def test_diff_between_commits(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test diff prints removed and added lines."""
        repo = Repository(cli_repo)
        first = repo.resolve_head()
        (cli_repo / "notes.txt").write_text("world\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", "Change"])
        second = repo.resolve_head()

        result = runner.invoke(cli, ["diff", first, second])

        assert result.exit_code == 0
        assert "Diff: notes.txt" in result.output
        assert "- hello" in result.output
        assert "+ world" in result.output

    def test_diff_same_commit(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test diff of a commit with itself."""
        head = Repository(cli_repo).resolve_head()

        result = runner.invoke(cli, ["diff", head, head])

        assert "No differences" in result.output


# ---- Bracketed Text Tests -----------------------------------------------------------------------------------


class TestBracketedText:
    """Tests for user text that looks like console markup."""

    MESSAGE = "Handle [/regex/] patterns"

    def test_commit_and_log_with_closing_tag_message(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a message containing a closing tag is shown verbatim."""
        (cli_repo / "notes.txt").write_text("regex\n")
        runner.invoke(cli, ["add", "notes.txt"])

        committed = runner.invoke(cli, ["commit", "-m", self.MESSAGE])
        logged = runner.invoke(cli, ["log"])
        oneline = runner.invoke(cli, ["log", "--oneline"])
        status = runner.invoke(cli, ["status"])

        assert committed.exit_code == 0
        assert self.MESSAGE in committed.output
        assert logged.exit_code == 0
        assert self.MESSAGE in logged.output
        assert oneline.exit_code == 0
        assert self.MESSAGE in oneline.output
        assert status.exit_code == 0
        assert self.MESSAGE in status.output

    def test_checkout_commit_with_closing_tag_message(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test checkout prints a bracketed message verbatim."""
        (cli_repo / "notes.txt").write_text("regex\n")
        runner.invoke(cli, ["add", "notes.txt"])
        runner.invoke(cli, ["commit", "-m", self.MESSAGE])
        head = Repository(cli_repo).resolve_head()

        result = runner.invoke(cli, ["checkout", head])

        assert result.exit_code == 0
        assert self.MESSAGE in result.output

    def test_bracketed_path_and_branch(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test file and branch names with brackets are not read as markup."""
        (cli_repo / "notes[red].txt").write_text("x")

        added = runner.invoke(cli, ["add", "notes[red].txt"])
        created = runner.invoke(cli, ["branch", "wip[bold]"])
        listed = runner.invoke(cli, ["branch"])

        assert added.exit_code == 0
        assert "notes[red].txt" in added.output
        assert created.exit_code == 0
        assert "wip[bold]" in created.output
        assert "wip[bold]" in listed.output


# ---- Branch Name Conflict Tests -----------------------------------------------------------------------------


class TestBranchNameConflicts:
    """Tests for branch names that nest inside one another."""

    def test_nested_after_parent_fails_cleanly(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test 'feat/x' after 'feat' is a reported error, not a crash."""
        runner.invoke(cli, ["branch", "feat"])

        result = runner.invoke(cli, ["branch", "feat/x"])

        assert result.exit_code == 1
        assert "conflicts with existing branch 'feat'" in result.output
        assert not isinstance(result.exception, OSError)

    def test_parent_after_nested_fails_cleanly(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test 'feat' after 'feat/x' names the conflicting branch."""
        runner.invoke(cli, ["branch", "feat/x"])

        result = runner.invoke(cli, ["branch", "feat"])

        assert result.exit_code == 1
        assert "conflicts with existing branch 'feat/x'" in result.output
        assert "already exists" not in result.output


# ---- Error Handling Tests -----------------------------------------------------------------------------------


class TestOutsideRepository:
    """Tests for commands run outside a repository."""

    @pytest.mark.parametrize("args", [["log"], ["commit", "-m", "x"], ["branch"]])
    def test_requires_repository(self, runner: CliRunner, workdir: Path, args: list[str]) -> None:
        """Test commands fail with an init hint."""
        result = runner.invoke(cli, args)

        assert result.exit_code == 1
        assert "minigit init" in result.output
