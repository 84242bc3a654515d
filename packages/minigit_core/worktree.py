"""Working directory access.

Checkout and merge write files through a ``WorkTree`` so the engines
can run against an in-memory tree as easily as against disk.

Execution Context:
    Library module - injected into Repository

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from pathlib import Path
from pathlib import PurePosixPath

from minigit_core.errors import WorkingFileNotFound


# ---- Path Helpers -------------------------------------------------------------------------------------------


def normalize_path(
        path: str,
) -> str:
    """Normalize a repo-relative path to POSIX form.

    Raises:
        ValueError: If the path is empty, absolute, or escapes the root.
    """
    posix = PurePosixPath(path.replace("\\", "/"))
    if posix.is_absolute():
        msg = f"Path must be relative to the repository root: {path}"
        raise ValueError(msg)

    parts = [part for part in posix.parts if part not in ("", ".")]
    if not parts or ".." in parts:
        msg = f"Path is outside the repository: {path}"
        raise ValueError(msg)

    return "/".join(parts)


# ---- WorkTree Interface -------------------------------------------------------------------------------------


class WorkTree(ABC):
    """Read/write access to working files by repo-relative path."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Return file content.

        Raises:
            WorkingFileNotFound: If the file does not exist.
        """

    @abstractmethod
    def write(self, path: str, data: bytes) -> None:
        """Create or overwrite a file."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a file exists."""


class DiskWorkTree(WorkTree):
    """Working files under a directory on disk.

    Attributes:
        root: Repository root directory.
    """

    def __init__(
            self,
            root: Path | str,
    ) -> None:
        self.root = Path(root).resolve()

    def _resolve(
            self,
            path: str,
    ) -> Path:
        return self.root.joinpath(*normalize_path(path).split("/"))

    def relative(
            self,
            path: Path | str,
    ) -> str:
        """Convert a filesystem path (absolute or cwd-relative) to a repo path.

        Raises:
            ValueError: If the path lies outside the root.
        """
        absolute = Path(path).resolve()
        try:
            relative = absolute.relative_to(self.root)
        except ValueError as path_error:
            msg = f"Path is outside the repository: {path}"
            raise ValueError(msg) from path_error
        return normalize_path(relative.as_posix())

    def read(
            self,
            path: str,
    ) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise WorkingFileNotFound(path)
        return target.read_bytes()

    def write(
            self,
            path: str,
            data: bytes,
    ) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def exists(
            self,
            path: str,
    ) -> bool:
        return self._resolve(path).is_file()


class MemoryWorkTree(WorkTree):
    """Working files held in a dictionary."""

    def __init__(
            self,
            files: dict[str, bytes] | None = None,
    ) -> None:
        self.files: dict[str, bytes] = {
            normalize_path(path): data for path, data in (files or {}).items()
        }

    def read(
            self,
            path: str,
    ) -> bytes:
        try:
            return self.files[normalize_path(path)]
        except KeyError:
            raise WorkingFileNotFound(path) from None

    def write(
            self,
            path: str,
            data: bytes,
    ) -> None:
        self.files[normalize_path(path)] = data

    def exists(
            self,
            path: str,
    ) -> bool:
        return normalize_path(path) in self.files
