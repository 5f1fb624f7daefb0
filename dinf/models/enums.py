from __future__ import annotations

from enum import Enum


class SizeUnit(str, Enum):
    KB = "KB"
    MB = "MB"
    GB = "GB"
    TB = "TB"
    PB = "PB"
