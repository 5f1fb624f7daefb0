from __future__ import annotations

from dinf.config.schema import AppConfig

DEFAULT_PATH = "./"
DEFAULT_TOP_COUNT = 5


def default_config() -> AppConfig:
    return AppConfig(
        top_count=DEFAULT_TOP_COUNT,
        glob_patterns=[],
        group_by_extension=True,
        summary_only=False,
        thousands_separator=",",
    )
