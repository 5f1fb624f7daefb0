from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol


@dataclass(slots=True, frozen=True)
class StatResult:
    size: int
    is_dir: bool
    is_file: bool = False
    is_symlink: bool = False


@dataclass(slots=True, frozen=True)
class DirEntry:
    path: str
    name: str
    stat: StatResult | None = None


class FileSystem(Protocol):
    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def stat(self, path: str, follow_symlinks: bool = False) -> StatResult: ...

    def scandir(self, path: str) -> Iterable[DirEntry]: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...


def _to_stat_result(st: os.stat_result) -> StatResult:
    return StatResult(
        size=st.st_size,
        is_dir=statmod.S_ISDIR(st.st_mode),
        is_file=statmod.S_ISREG(st.st_mode),
        is_symlink=statmod.S_ISLNK(st.st_mode),
    )


class OsFileSystem:
    """Read-only view of the real filesystem.

    Symlinks are only followed when asked for explicitly.
    """

    def expanduser(self, path: str) -> str:
        return os.path.expanduser(path)

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def stat(self, path: str, follow_symlinks: bool = False) -> StatResult:
        return _to_stat_result(os.stat(path, follow_symlinks=follow_symlinks))

    def scandir(self, path: str) -> Iterable[DirEntry]:
        with os.scandir(path) as entries:
            for e in entries:
                try:
                    sr = _to_stat_result(e.stat(follow_symlinks=False))
                except OSError:
                    sr = None
                yield DirEntry(path=e.path, name=e.name, stat=sr)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)


DEFAULT_FS: FileSystem = OsFileSystem()


def is_text(path: str) -> bool:
    """False for names carrying undecodable bytes (surrogate escapes)."""
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def lossy_text(path: str) -> str:
    """Replace undecodable bytes with U+FFFD so the name is safe to print."""
    return path.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
