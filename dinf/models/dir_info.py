from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from result import Result


@dataclass(slots=True, frozen=True)
class FileRecord:
    path: str
    size: int


@dataclass(slots=True, frozen=True)
class ExtStat:
    ext: str
    size: int


@dataclass(slots=True, frozen=True)
class ExtStats:
    top_by_ext: tuple[ExtStat, ...] = ()
    others_size: int = 0


@dataclass(slots=True, frozen=True)
class DirInfo:
    path_processed: str
    total_files: int
    total_size: int
    top_files: tuple[FileRecord, ...] = ()
    ext_stats: ExtStats | None = None
    skipped_entries: int = 0


@dataclass(slots=True, frozen=True)
class ScanOptions:
    top_count: int = 5
    glob_patterns: tuple[str, ...] | None = None
    group_by_extension: bool = True
    summary_only: bool = False

    @property
    def tracks_top_files(self) -> bool:
        return not self.summary_only

    @property
    def tracks_extensions(self) -> bool:
        return self.group_by_extension and not self.summary_only


class ScanErrorCode(str, Enum):
    INVALID_TOP_COUNT = "invalid_top_count"
    INVALID_GLOB_PATTERN = "invalid_glob_pattern"
    PATH_NOT_VALID_TEXT = "path_not_valid_text"
    TRAVERSAL_IO = "traversal_io"
    NOT_FOUND = "not_found"
    ROOT_STAT_FAILED = "root_stat_failed"


@dataclass(slots=True, frozen=True)
class ScanError:
    code: ScanErrorCode
    target: str
    message: str


@dataclass(slots=True)
class ScanStats:
    files: int = 0
    directories: int = 0
    skipped: int = 0


ProgressCallback = Callable[[str, int, int], None]
SkipCallback = Callable[[ScanError], None]

DirInfoResult = Result[DirInfo, ScanError]
