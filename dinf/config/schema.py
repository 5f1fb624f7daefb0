from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from result import Err, Ok, Result

from dinf.models.dir_info import ScanError, ScanErrorCode, ScanOptions
from dinf.services.formatting import NumberFormat


@dataclass(slots=True)
class AppConfig:
    top_count: int = 5
    glob_patterns: list[str] = field(default_factory=list)
    group_by_extension: bool = True
    summary_only: bool = False
    thousands_separator: str = ","

    def to_dict(self) -> dict[str, Any]:
        return {
            "topCount": self.top_count,
            "globPatterns": self.glob_patterns,
            "groupByExtension": self.group_by_extension,
            "summaryOnly": self.summary_only,
            "thousandsSeparator": self.thousands_separator,
        }

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            top_count=self.top_count,
            glob_patterns=tuple(self.glob_patterns) or None,
            group_by_extension=self.group_by_extension,
            summary_only=self.summary_only,
        )

    def number_format(self) -> NumberFormat:
        return NumberFormat(thousands_separator=self.thousands_separator)


def from_dict(data: dict[str, Any], defaults: AppConfig) -> AppConfig:
    globs_raw = data.get("globPatterns", defaults.glob_patterns)
    if isinstance(globs_raw, str):
        globs_raw = split_globs(globs_raw)

    return AppConfig(
        top_count=max(0, int(data.get("topCount", defaults.top_count))),
        glob_patterns=[str(x) for x in globs_raw if str(x).strip()],
        group_by_extension=bool(data.get("groupByExtension", defaults.group_by_extension)),
        summary_only=bool(data.get("summaryOnly", defaults.summary_only)),
        thousands_separator=str(data.get("thousandsSeparator", defaults.thousands_separator)),
    )


def split_globs(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_top_count(raw: str) -> Result[int, ScanError]:
    try:
        value = int(raw.strip())
    except ValueError:
        value = -1
    if value < 0:
        return Err(
            ScanError(
                code=ScanErrorCode.INVALID_TOP_COUNT,
                target=raw,
                message=f"-n must be a number but was {raw}",
            )
        )
    return Ok(value)
