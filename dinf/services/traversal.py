from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from dinf.models.dir_info import ScanError, ScanErrorCode, ScanStats, SkipCallback
from dinf.services.fs import DEFAULT_FS, DirEntry, FileSystem
from dinf.services.patterns import GlobSet

logger = logging.getLogger(__name__)


def _report_skip(stats: ScanStats, on_skip: SkipCallback | None, error: ScanError) -> None:
    stats.skipped += 1
    logger.debug("skipping %s: %s", error.target, error.message)
    if on_skip is not None:
        on_skip(error)


def walk_entries(
    root: str,
    stats: ScanStats,
    fs: FileSystem = DEFAULT_FS,
    on_skip: SkipCallback | None = None,
) -> Iterator[DirEntry]:
    """Yield *root* and every entry below it, directories included.

    A symlinked root is followed, symlinked directories below it are not.
    Unreadable directories and entries without metadata are reported
    through *on_skip* and the walk carries on.
    """
    try:
        root_stat = fs.stat(root, follow_symlinks=True)
    except OSError as exc:
        _report_skip(
            stats,
            on_skip,
            ScanError(code=ScanErrorCode.TRAVERSAL_IO, target=root, message=f"Cannot stat: {exc}"),
        )
        return

    yield DirEntry(path=root, name=os.path.basename(root.rstrip("/")) or root, stat=root_stat)
    if not root_stat.is_dir:
        return

    stats.directories += 1
    pending = [root]
    while pending:
        current = pending.pop()
        try:
            entries = list(fs.scandir(current))
        except OSError as exc:
            _report_skip(
                stats,
                on_skip,
                ScanError(
                    code=ScanErrorCode.TRAVERSAL_IO,
                    target=current,
                    message=f"Cannot read directory: {exc}",
                ),
            )
            continue

        subdirs: list[str] = []
        for entry in entries:
            st = entry.stat
            if st is None:
                _report_skip(
                    stats,
                    on_skip,
                    ScanError(
                        code=ScanErrorCode.TRAVERSAL_IO,
                        target=entry.path,
                        message="Cannot read metadata",
                    ),
                )
                continue
            yield entry
            if st.is_dir and not st.is_symlink:
                stats.directories += 1
                subdirs.append(entry.path)
        pending.extend(reversed(subdirs))


def iter_candidates(
    root: str,
    glob_set: GlobSet | None,
    stats: ScanStats,
    fs: FileSystem = DEFAULT_FS,
    on_skip: SkipCallback | None = None,
) -> Iterator[DirEntry]:
    """Yield the regular, non-symlink files under *root* that pass *glob_set*."""
    for entry in walk_entries(root, stats, fs=fs, on_skip=on_skip):
        if glob_set is not None and not glob_set.is_match(entry.path):
            continue
        st = entry.stat
        if st is None or not st.is_file or st.is_symlink:
            continue
        yield entry
