from __future__ import annotations

import logging

from result import Err, Ok

from dinf.models.dir_info import (
    DirInfo,
    DirInfoResult,
    FileRecord,
    ProgressCallback,
    ScanError,
    ScanErrorCode,
    ScanOptions,
    ScanStats,
    SkipCallback,
)
from dinf.services.extensions import ExtensionAggregator
from dinf.services.fs import DEFAULT_FS, FileSystem, is_text, lossy_text
from dinf.services.patterns import GlobSet, compile_globs
from dinf.services.topk import BoundedTopK
from dinf.services.traversal import iter_candidates

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 100


def _check_root(path: str, fs: FileSystem) -> str | ScanError:
    if not is_text(path):
        return ScanError(
            code=ScanErrorCode.PATH_NOT_VALID_TEXT,
            target=lossy_text(path),
            message="Path is not valid text",
        )
    expanded = fs.expanduser(path)
    if not fs.exists(expanded):
        return ScanError(
            code=ScanErrorCode.NOT_FOUND,
            target=path,
            message="Path does not exist",
        )
    try:
        fs.stat(expanded, follow_symlinks=True)
    except OSError as exc:
        return ScanError(
            code=ScanErrorCode.ROOT_STAT_FAILED,
            target=path,
            message=f"Cannot stat root: {exc}",
        )
    return expanded


def process_dir_info(
    path: str,
    options: ScanOptions,
    fs: FileSystem = DEFAULT_FS,
    progress_callback: ProgressCallback | None = None,
    on_skip: SkipCallback | None = None,
) -> DirInfoResult:
    """Walk *path* once and collect totals, top files and extension sizes.

    Root and glob problems are returned as ``Err`` before anything is read.
    Problems with individual entries below the root never abort the walk;
    they are counted in ``DirInfo.skipped_entries`` and passed to *on_skip*.
    """
    glob_set: GlobSet | None = None
    if options.glob_patterns:
        compiled = compile_globs(options.glob_patterns)
        if isinstance(compiled, Err):
            return compiled
        glob_set = compiled.unwrap()

    root = _check_root(path, fs)
    if isinstance(root, ScanError):
        return Err(root)

    top = BoundedTopK(options.top_count) if options.tracks_top_files else None
    by_ext = ExtensionAggregator() if options.tracks_extensions else None
    stats = ScanStats()
    total_size = 0

    logger.debug("scanning %s (top=%d, globs=%s)", root, options.top_count, options.glob_patterns)
    for entry in iter_candidates(root, glob_set, stats, fs=fs, on_skip=on_skip):
        size = entry.stat.size if entry.stat is not None else 0
        stats.files += 1
        total_size += size

        if by_ext is not None:
            by_ext.add(entry.name, size)

        if top is not None and size > top.min_size:
            if is_text(entry.path):
                top.offer(FileRecord(path=entry.path, size=size))
            else:
                stats.skipped += 1
                logger.debug("left %r out of the largest files: not valid text", entry.path)
                if on_skip is not None:
                    on_skip(
                        ScanError(
                            code=ScanErrorCode.PATH_NOT_VALID_TEXT,
                            target=lossy_text(entry.path),
                            message="Path is not valid text; left out of the largest files",
                        )
                    )

        if progress_callback is not None and stats.files % PROGRESS_EVERY == 0:
            progress_callback(entry.path, stats.files, stats.directories)

    logger.debug(
        "scanned %s: %d files, %d bytes, %d skipped",
        root,
        stats.files,
        total_size,
        stats.skipped,
    )
    return Ok(
        DirInfo(
            path_processed=path,
            total_files=stats.files,
            total_size=total_size,
            top_files=tuple(top.items()) if top is not None else (),
            ext_stats=by_ext.finalize(options.top_count) if by_ext is not None else None,
            skipped_entries=stats.skipped,
        )
    )
