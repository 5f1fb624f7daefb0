from __future__ import annotations

from dataclasses import dataclass

from dinf.models.enums import SizeUnit

UNITS = [SizeUnit.KB, SizeUnit.MB, SizeUnit.GB, SizeUnit.TB, SizeUnit.PB]
SCALE = 1000.0

# 999.95 and above rounds to "1000.0" at one decimal, so promote early.
PROMOTE_AT = 999.95


@dataclass(slots=True, frozen=True)
class NumberFormat:
    thousands_separator: str = ","


def format_size(size: int) -> tuple[str, SizeUnit]:
    """Split *size* bytes into a display number and a decimal unit.

    Values under 1 KB keep three decimals in KB; everything else gets one
    decimal in the smallest unit that keeps the rounded number below 1000.
    PB is the last unit, so very large values may exceed four digits.
    """
    value = max(0, size) / SCALE
    if value < 1.0:
        return f"{value:.3f}", SizeUnit.KB
    unit = 0
    while value >= PROMOTE_AT and unit < len(UNITS) - 1:
        value /= SCALE
        unit += 1
    return f"{value:.1f}", UNITS[unit]


def format_bytes(size: int) -> str:
    number, unit = format_size(size)
    return f"{number} {unit.value}"


def format_count(count: int, number_format: NumberFormat = NumberFormat()) -> str:
    grouped = f"{count:,}"
    if number_format.thousands_separator == ",":
        return grouped
    return grouped.replace(",", number_format.thousands_separator)


def relative_bar(size: int, total: int, width: int = 16) -> str:
    if width <= 0 or total <= 0:
        return ""
    ratio = min(1.0, max(0.0, size / total))
    filled = int(round(ratio * width))
    return "█" * filled + "░" * max(0, width - filled)
