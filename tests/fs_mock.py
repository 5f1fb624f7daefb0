from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from dinf.services.fs import DirEntry, StatResult


@dataclass
class _MockEntry:
    kind: str
    size: int
    content: str
    readable: bool = True
    stat_fails: bool = False


class MemoryFileSystem:
    def __init__(self) -> None:
        self._entries: dict[str, _MockEntry] = {}

    def add_dir(self, path: str, readable: bool = True) -> MemoryFileSystem:
        key = self._normalize(path)
        self._add_parents(key)
        self._entries[key] = _MockEntry(kind="dir", size=0, content="", readable=readable)
        return self

    def add_file(
        self,
        path: str,
        size: int = 0,
        content: str = "",
        stat_fails: bool = False,
    ) -> MemoryFileSystem:
        key = self._normalize(path)
        self._add_parents(key)
        self._entries[key] = _MockEntry(kind="file", size=size, content=content, stat_fails=stat_fails)
        return self

    def add_symlink(self, path: str, size: int = 10) -> MemoryFileSystem:
        key = self._normalize(path)
        self._add_parents(key)
        self._entries[key] = _MockEntry(kind="symlink", size=size, content="")
        return self

    def _add_parents(self, key: str) -> None:
        # auto-create parent dirs
        for parent in reversed(PurePosixPath(key).parents):
            pk = str(parent)
            if pk not in self._entries:
                self._entries[pk] = _MockEntry(kind="dir", size=0, content="")

    def expanduser(self, path: str) -> str:
        return path.replace("~", "/mock/home")

    def exists(self, path: str) -> bool:
        return self._normalize(path) in self._entries

    def stat(self, path: str, follow_symlinks: bool = False) -> StatResult:
        key = self._normalize(path)
        entry = self._entries.get(key)
        if entry is None or entry.stat_fails:
            raise OSError(f"No such file or directory: '{key}'")
        return self._stat_of(entry)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        key = self._normalize(path)
        entry = self._entries.get(key)
        if entry is None:
            raise OSError(f"No such file or directory: '{key}'")
        return entry.content

    def scandir(self, path: str) -> list[DirEntry]:
        key = self._normalize(path)
        entry = self._entries.get(key)
        if entry is None:
            raise OSError(f"No such file or directory: '{key}'")
        if not entry.readable:
            raise PermissionError(f"Permission denied: '{key}'")
        prefix = key.rstrip("/") + "/"
        result: list[DirEntry] = []
        for p, mock in self._entries.items():
            if not p.startswith(prefix):
                continue
            remainder = p[len(prefix) :]
            if not remainder or "/" in remainder:
                continue
            st = None if mock.stat_fails else self._stat_of(mock)
            result.append(DirEntry(path=p, name=remainder, stat=st))
        return result

    @staticmethod
    def _stat_of(entry: _MockEntry) -> StatResult:
        return StatResult(
            size=entry.size,
            is_dir=entry.kind == "dir",
            is_file=entry.kind == "file",
            is_symlink=entry.kind == "symlink",
        )

    @staticmethod
    def _normalize(path: str) -> str:
        return path.rstrip("/") or "/"
