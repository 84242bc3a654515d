"""Local repository management for MiniGit.

Handles creation, validation, and manipulation of the .minigit
directory structure: content objects, commit records, branch refs,
HEAD, the staging index and configuration. A ``Repository`` is an
explicit handle, so several repositories can be used side by side.

Execution Context:
    Library module - imported by CLI commands

Dependencies:
    - minigit_core.models: Data models
    - minigit_core.objects: Content store
    - minigit_core.history: Ancestry and LCA
    - minigit_core.merge: Three-way merge
    - minigit_core.diff: Line diffs

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Iterator

from minigit_core.diff import POSITIONAL
from minigit_core.diff import FileDiff
from minigit_core.diff import diff_trees
from minigit_core.errors import AlreadyExists
from minigit_core.errors import BranchNameConflict
from minigit_core.errors import CommitNotFound
from minigit_core.errors import DetachedHead
from minigit_core.errors import MinigitError
from minigit_core.errors import NoCommitYet
from minigit_core.errors import NoCommonAncestor
from minigit_core.errors import NotFound
from minigit_core.errors import ObjectNotFound
from minigit_core.errors import RepositoryExists
from minigit_core.errors import RepositoryNotInitialized
from minigit_core.history import ancestors
from minigit_core.history import iter_history
from minigit_core.history import lowest_common_ancestor
from minigit_core.merge import MergeResult
from minigit_core.merge import apply_merge
from minigit_core.merge import merge_trees
from minigit_core.models import Branch
from minigit_core.models import Commit
from minigit_core.models import Entry
from minigit_core.models import Head
from minigit_core.models import RepoConfig
from minigit_core.objects import ObjectStore
from minigit_core.objects import is_fingerprint
from minigit_core.staging import StagingArea
from minigit_core.worktree import DiskWorkTree
from minigit_core.worktree import WorkTree
from minigit_core.worktree import normalize_path

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


MINIGIT_DIR = ".minigit"
CONFIG_FILE = "config.json"
HEAD_FILE = "HEAD"
INDEX_FILE = "index.json"
REFS_DIR = "refs"
HEADS_DIR = "heads"
OBJECTS_DIR = "objects"
COMMITS_DIR = "commits"


# ---- Result Classes -----------------------------------------------------------------------------------------


@dataclass
class CheckoutResult:
    """Result of a checkout.

    Attributes:
        target: Name the user asked for.
        commit_id: Commit that was checked out.
        branch: Branch HEAD now tracks (None when detached).
        restored: Paths written to the working tree.
        missing: Paths whose object was missing and were left untouched.
    """

    target: str
    commit_id: str
    branch: str | None = None
    restored: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def is_detached(
            self,
    ) -> bool:
        return self.branch is None


# ---- Repository Class ---------------------------------------------------------------------------------------


class Repository:
    """Manages a local MiniGit repository.

    Attributes:
        root: Root directory containing the .minigit folder.
        minigit_dir: Path to the .minigit directory.
        worktree: Working directory the repository reads and writes.
        objects: Content object store.
        staging: Staging area for the next commit.
    """

    def __init__(
            self,
            root: Path | str,
            worktree: WorkTree | None = None,
    ) -> None:
        """Initialize repository at given root path.

        Args:
            root: Directory containing or to contain the .minigit folder.
            worktree: Working directory access (defaults to files under root).
        """
        self.root = Path(root).resolve()
        self.minigit_dir = self.root / MINIGIT_DIR
        self.worktree = worktree if worktree is not None else DiskWorkTree(self.root)
        self.objects = ObjectStore(self.objects_dir)
        self.staging = StagingArea(self.index_path)

    # ---- Path Properties ------------------------------------------------------------------------------------

    @property
    def config_path(
            self,
    ) -> Path:
        """Path to config.json."""
        return self.minigit_dir / CONFIG_FILE

    @property
    def head_path(
            self,
    ) -> Path:
        """Path to HEAD file."""
        return self.minigit_dir / HEAD_FILE

    @property
    def index_path(
            self,
    ) -> Path:
        """Path to index.json staging area."""
        return self.minigit_dir / INDEX_FILE

    @property
    def refs_dir(
            self,
    ) -> Path:
        """Path to refs directory."""
        return self.minigit_dir / REFS_DIR

    @property
    def heads_dir(
            self,
    ) -> Path:
        """Path to refs/heads directory (branches)."""
        return self.refs_dir / HEADS_DIR

    @property
    def objects_dir(
            self,
    ) -> Path:
        """Path to objects directory."""
        return self.minigit_dir / OBJECTS_DIR

    @property
    def commits_dir(
            self,
    ) -> Path:
        """Path to objects/commits directory."""
        return self.objects_dir / COMMITS_DIR

    # ---- Repository State -----------------------------------------------------------------------------------

    def exists(
            self,
    ) -> bool:
        """Check if the .minigit directory exists."""
        return self.minigit_dir.is_dir()

    def is_valid(
            self,
    ) -> bool:
        """Check that all required files and directories exist."""
        required = [
            self.config_path,
            self.head_path,
            self.heads_dir,
            self.commits_dir,
        ]
        return all(p.exists() for p in required)

    def _require(
            self,
    ) -> None:
        if not self.exists():
            raise RepositoryNotInitialized(str(self.root))

    # ---- Initialization -------------------------------------------------------------------------------------

    def init(
            self,
            project_name: str = "",
            default_branch: str = "main",
    ) -> None:
        """Initialize a new MiniGit repository.

        Creates the .minigit directory structure with config, an empty
        index and HEAD referring to ``default_branch``. The branch itself
        is created by the first commit.

        Raises:
            RepositoryExists: If a repository already exists here.
        """
        if self.exists():
            raise RepositoryExists(str(self.minigit_dir))

        try:
            self.heads_dir.mkdir(parents=True)
            self.commits_dir.mkdir(parents=True)

            config = RepoConfig(
                project_name=project_name or self.root.name,
                default_branch=default_branch,
            )
            config.save(self.config_path)

            self._write_head(default_branch)
            self.staging.clear()

        except OSError as init_error:
            msg = f"Failed to initialize repository: {init_error}"
            raise MinigitError(msg) from init_error

        logger.debug("Initialized repository at %s", self.minigit_dir)

    # ---- Config Operations ----------------------------------------------------------------------------------

    def get_config(
            self,
    ) -> RepoConfig:
        """Load repository configuration."""
        self._require()
        return RepoConfig.load(self.config_path)

    def update_config(
            self,
            config: RepoConfig,
    ) -> None:
        """Save updated configuration."""
        self._require()
        config.save(self.config_path)

    # ---- HEAD Operations ------------------------------------------------------------------------------------

    def get_head(
            self,
    ) -> Head:
        """Read HEAD."""
        self._require()
        if not self.head_path.exists():
            return Head(branch=self.get_config().default_branch)
        return Head.parse(self.head_path.read_text())

    def get_current_branch(
            self,
    ) -> str | None:
        """Name of the branch HEAD tracks, or None if detached."""
        return self.get_head().branch

    def resolve_head(
            self,
    ) -> str | None:
        """Commit ID HEAD points to.

        Returns:
            Commit ID, or None when HEAD's branch has no commits yet.
        """
        head = self.get_head()
        if head.branch is not None:
            return self.get_branch_commit(head.branch)
        return head.commit_id

    def _write_head(
            self,
            branch: str,
    ) -> None:
        self.head_path.write_text(Head(branch=branch).serialize())

    def _write_head_detached(
            self,
            commit_id: str,
    ) -> None:
        self.head_path.write_text(Head(commit_id=commit_id).serialize())

    def update_branch_or_head(
            self,
            commit_id: str,
    ) -> None:
        """Move the current branch to ``commit_id``, or HEAD itself if detached."""
        branch = self.get_current_branch()
        if branch is not None:
            self._write_branch(branch, commit_id)
            logger.debug("Branch %s -> %s", branch, commit_id[:8])
        else:
            self._write_head_detached(commit_id)
            logger.debug("Detached HEAD -> %s", commit_id[:8])

    # ---- Branch Operations ----------------------------------------------------------------------------------

    def _branch_path(
            self,
            name: str,
    ) -> Path:
        return self.heads_dir.joinpath(*normalize_path(name).split("/"))

    def _write_branch(
            self,
            name: str,
            commit_id: str,
    ) -> None:
        branch_path = self._branch_path(name)
        branch_path.parent.mkdir(parents=True, exist_ok=True)
        branch_path.write_text(f"{commit_id}\n")

    def list_branches(
            self,
    ) -> list[str]:
        """List all branches that point at a commit."""
        self._require()
        if not self.heads_dir.exists():
            return []

        branches = []
        for path in self.heads_dir.rglob("*"):
            if path.is_file():
                branches.append(path.relative_to(self.heads_dir).as_posix())
        return sorted(branches)

    def branch_exists(
            self,
            name: str,
    ) -> bool:
        """Check whether a branch exists."""
        self._require()
        try:
            return self._branch_path(name).is_file()
        except ValueError:
            return False

    def get_branch_commit(
            self,
            name: str,
    ) -> str | None:
        """Commit ID a branch points to, or None if the branch does not exist."""
        if not self.branch_exists(name):
            return None

        content = self._branch_path(name).read_text().strip()
        return content or None

    def _conflicting_branch(
            self,
            name: str,
    ) -> str | None:
        """Existing branch that shares a path prefix with ``name``, if any."""
        parts = normalize_path(name).split("/")
        for depth in range(1, len(parts)):
            prefix = "/".join(parts[:depth])
            if self._branch_path(prefix).is_file():
                return prefix

        branch_path = self._branch_path(name)
        if branch_path.is_dir():
            nested = sorted(p for p in branch_path.rglob("*") if p.is_file())
            if nested:
                return nested[0].relative_to(self.heads_dir).as_posix()
        return None

    def create_branch(
            self,
            name: str,
    ) -> Branch:
        """Create a branch at the current HEAD commit.

        Raises:
            AlreadyExists: If the branch already exists.
            BranchNameConflict: If the name nests inside or contains an
                existing branch (e.g. 'feat' and 'feat/x').
            NoCommitYet: If HEAD does not resolve to a commit yet.
            ValueError: If the name is not a valid branch name.
        """
        self._require()
        branch_path = self._branch_path(name)

        if branch_path.is_file():
            raise AlreadyExists(name)

        existing = self._conflicting_branch(name)
        if existing is not None:
            raise BranchNameConflict(name, existing)

        commit_id = self.resolve_head()
        if commit_id is None:
            raise NoCommitYet(self.get_current_branch() or "HEAD")

        try:
            self._write_branch(name, commit_id)
        except OSError as write_error:
            msg = f"Failed to create branch '{name}': {write_error}"
            raise MinigitError(msg) from write_error

        logger.debug("Created branch %s at %s", name, commit_id[:8])

        return Branch(name=name, commit_id=commit_id)

    # ---- Object and Staging Operations ----------------------------------------------------------------------

    def read_object(
            self,
            fingerprint: str,
    ) -> bytes:
        """Load content object bytes.

        Raises:
            ObjectNotFound: If the object is missing.
        """
        return self.objects.get(fingerprint)

    def stage(
            self,
            path: str,
            fingerprint: str,
    ) -> None:
        """Stage an already stored object under ``path``."""
        self._require()
        self.staging.stage(normalize_path(path), fingerprint)

    def stage_file(
            self,
            path: str,
    ) -> Entry:
        """Store a working file's current content and stage it.

        Args:
            path: Repo-relative path of the working file.

        Returns:
            The staged (path, fingerprint) pair.

        Raises:
            WorkingFileNotFound: If the file does not exist.
            ValueError: If the path is outside the working tree.
        """
        self._require()
        rel_path = normalize_path(path)
        if rel_path == MINIGIT_DIR or rel_path.startswith(f"{MINIGIT_DIR}/"):
            msg = f"Cannot stage repository internals: {path}"
            raise ValueError(msg)

        fingerprint = self.objects.put(self.worktree.read(rel_path))
        self.staging.stage(rel_path, fingerprint)
        return rel_path, fingerprint

    def get_staged(
            self,
    ) -> list[Entry]:
        """Entries pending the next commit."""
        self._require()
        return self.staging.entries()

    # ---- Commit Operations ----------------------------------------------------------------------------------

    def get_commit(
            self,
            commit_id: str,
    ) -> Commit | None:
        """Load a commit by ID, or None if there is no such record.

        Anything other than a full lowercase hex id names no commit.
        """
        if not is_fingerprint(commit_id):
            return None

        commit_path = self.commits_dir / f"{commit_id}.json"
        if not commit_path.is_file():
            return None

        return Commit.load(commit_path)

    def load_commit(
            self,
            commit_id: str,
    ) -> Commit:
        """Load a commit by ID.

        Raises:
            CommitNotFound: If there is no such commit.
        """
        commit = self.get_commit(commit_id)
        if commit is None:
            raise CommitNotFound(commit_id)
        return commit

    def create_commit_record(
            self,
            message: str,
            entries: list[Entry],
            parent: str | None,
            timestamp: str | None = None,
    ) -> Commit:
        """Build and persist a commit record without moving any ref.

        A record already stored under the same id is kept as is.
        """
        self._require()
        commit = Commit.create(
            message=message,
            entries=entries,
            parent=parent,
            timestamp=timestamp,
        )

        existing = self.get_commit(commit.id)
        if existing is not None:
            logger.debug("Commit %s already stored; reusing record", commit.id[:8])
            return existing

        commit.save(self.commits_dir)
        logger.debug("Stored commit %s (parent %s)", commit.id[:8], parent)
        return commit

    def create_commit(
            self,
            message: str,
            timestamp: str | None = None,
    ) -> Commit:
        """Commit the staged entries on top of HEAD.

        Advances the current branch (or detached HEAD) and clears the
        staging area.

        Raises:
            NothingStaged: If nothing is staged.
        """
        self._require()
        entries = self.staging.snapshot()
        parent = self.resolve_head()

        commit = self.create_commit_record(message, entries, parent, timestamp)
        self.update_branch_or_head(commit.id)
        self.staging.clear()

        return commit

    # ---- History Operations ---------------------------------------------------------------------------------

    def ancestors(
            self,
            commit_id: str | None = None,
    ) -> Iterator[str]:
        """Lazily yield a commit's id and those of its ancestors (default: HEAD).

        Raises:
            BrokenHistory: If a commit in the chain is missing.
        """
        self._require()
        start = commit_id if commit_id is not None else self.resolve_head()
        return ancestors(start, self.get_commit)

    def iter_commits(
            self,
            commit_id: str | None = None,
    ) -> Iterator[Commit]:
        """Lazily yield commit records from a commit (default: HEAD) to the root."""
        self._require()
        start = commit_id if commit_id is not None else self.resolve_head()
        return iter_history(start, self.get_commit)

    def get_commit_history(
            self,
            start_commit: str | None = None,
            limit: int | None = None,
    ) -> list[Commit]:
        """Commits from ``start_commit`` (default: HEAD) back to the root.

        Raises:
            BrokenHistory: If a commit in the chain is missing.
        """
        commits = []
        for commit in self.iter_commits(start_commit):
            if limit and len(commits) >= limit:
                break
            commits.append(commit)
        return commits

    def lowest_common_ancestor(
            self,
            first: str,
            second: str,
    ) -> str | None:
        """Nearest commit reachable from both commits, or None."""
        self._require()
        return lowest_common_ancestor(first, second, self.get_commit)

    # ---- Checkout -------------------------------------------------------------------------------------------

    def resolve_target(
            self,
            target: str,
    ) -> tuple[str, str | None]:
        """Resolve a branch name or commit ID.

        Returns:
            (commit_id, branch_name) where branch_name is None for a raw commit.

        Raises:
            NotFound: If ``target`` names neither a branch nor a commit.
        """
        self._require()
        if self.branch_exists(target):
            commit_id = self.get_branch_commit(target)
            if commit_id and self.get_commit(commit_id) is not None:
                return commit_id, target
            raise NotFound(target)

        if self.get_commit(target) is not None:
            return target, None

        raise NotFound(target)

    def checkout(
            self,
            target: str,
    ) -> CheckoutResult:
        """Switch HEAD to a branch or commit and restore its files.

        Every entry of the resolved commit overwrites its working file.
        An entry whose object is missing is recorded in ``missing`` and
        the rest are still restored.

        Raises:
            NotFound: If ``target`` names neither a branch nor a commit.
        """
        commit_id, branch = self.resolve_target(target)
        commit = self.load_commit(commit_id)
        result = CheckoutResult(target=target, commit_id=commit_id, branch=branch)

        for path, fingerprint in commit.entries:
            try:
                data = self.objects.get(fingerprint)
            except ObjectNotFound:
                logger.warning("Missing blob for %s (%s)", path, fingerprint)
                result.missing.append(path)
                continue

            self.worktree.write(path, data)
            result.restored.append(path)

        if branch is not None:
            self._write_head(branch)
        else:
            self._write_head_detached(commit_id)

        logger.debug("Checked out %s at %s", target, commit_id[:8])
        return result

    # ---- Merge and Diff -------------------------------------------------------------------------------------

    def merge(
            self,
            branch: str,
    ) -> MergeResult:
        """Three-way merge ``branch`` into the current branch's working files.

        No commit is created; the caller stages and commits the result.

        Raises:
            DetachedHead: If HEAD is not on a branch.
            NoCommitYet: If the current branch has no commits.
            NotFound: If ``branch`` does not exist.
            NoCommonAncestor: If the histories are unrelated.
            ObjectNotFound: If an object needed for the merge is missing;
                no working file is written in that case.
        """
        head = self.get_head()
        if head.is_detached:
            raise DetachedHead(head.commit_id)

        current_id = self.get_branch_commit(head.branch)
        if current_id is None:
            raise NoCommitYet(head.branch)

        target_id = self.get_branch_commit(branch)
        if target_id is None:
            raise NotFound(branch)

        lca = self.lowest_common_ancestor(current_id, target_id)
        if lca is None:
            raise NoCommonAncestor(current_id, target_id)

        result = merge_trees(
            base=self.load_commit(lca).files,
            current=self.load_commit(current_id).files,
            target=self.load_commit(target_id).files,
            read_object=self.objects.get,
            target_name=branch,
        )
        result.lca = lca
        result.current = current_id
        result.target = target_id

        apply_merge(result, self.worktree)
        logger.debug(
            "Merged %s into %s: %d conflict(s), %d merged",
            branch, head.branch, len(result.conflicts), len(result.merged),
        )
        return result

    def diff(
            self,
            first: str,
            second: str,
            mode: str = POSITIONAL,
    ) -> list[FileDiff]:
        """Line diff of the files two commits share.

        Raises:
            CommitNotFound: If either commit does not exist.
            ObjectNotFound: If an object for a shared path is missing.
        """
        self._require()
        return diff_trees(
            self.load_commit(first).files,
            self.load_commit(second).files,
            read_object=self.objects.get,
            mode=mode,
        )


# ---- Module Functions ---------------------------------------------------------------------------------------


def find_repository(
        start_path: Path | str | None = None,
) -> Repository | None:
    """Find a MiniGit repository in the current or parent directories."""
    current = Path(start_path or Path.cwd()).resolve()

    while True:
        repo = Repository(current)
        if repo.exists():
            return repo
        if current == current.parent:
            return None
        current = current.parent


def init_repository(
        path: Path | str | None = None,
        project_name: str = "",
        default_branch: str = "main",
) -> Repository:
    """Initialize a new MiniGit repository (defaults to cwd)."""
    repo = Repository(path or Path.cwd())
    repo.init(project_name=project_name, default_branch=default_branch)
    return repo
