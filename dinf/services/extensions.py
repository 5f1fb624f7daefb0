from __future__ import annotations

from dinf.models.dir_info import ExtStat, ExtStats
from dinf.services.fs import lossy_text


def extension_key(name: str) -> str | None:
    """Return the text after the last dot of *name*, without the dot.

    Dot files such as ``.bashrc`` and names without a dot have no extension.
    Undecodable bytes in the extension come back as U+FFFD.
    """
    if name == "..":
        return None
    dot = name.rfind(".")
    if dot <= 0:
        return None
    return lossy_text(name[dot + 1 :])


class ExtensionAggregator:
    __slots__ = ("_sizes",)

    def __init__(self) -> None:
        self._sizes: dict[str, int] = {}

    def add(self, name: str, size: int) -> None:
        key = extension_key(name)
        if key is not None:
            self._sizes[key] = self._sizes.get(key, 0) + size

    @property
    def total_size(self) -> int:
        return sum(self._sizes.values())

    def __len__(self) -> int:
        return len(self._sizes)

    def finalize(self, top_n: int) -> ExtStats:
        """Keep the *top_n* biggest keys and fold the rest into ``others_size``."""
        ranked = sorted(self._sizes.items(), key=lambda kv: kv[1], reverse=True)
        top = tuple(ExtStat(ext=ext, size=size) for ext, size in ranked[: max(0, top_n)])
        others = sum(size for _, size in ranked[max(0, top_n) :])
        return ExtStats(top_by_ext=top, others_size=others)
