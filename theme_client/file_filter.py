from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatchcase
import logging
from pathlib import Path
import re
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS = (
    "config.yml",
    ".DS_Store",
    "*.swp",
    "*~",
    ".git/*",
)


class FileFilter(Protocol):
    def match(self, key: str) -> bool: ...


class NullFileFilter:
    def match(self, key: str) -> bool:
        return False


def _path_suffixes(key: str) -> list[str]:
    parts = key.split("/")
    return ["/".join(parts[index:]) for index in range(len(parts))]


class PatternFileFilter:
    """Ignore predicate built from glob patterns and ``/regex/`` patterns.

    Globs match the full key or any trailing path of it, so ``*.swp`` ignores
    ``templates/index.liquid.swp``.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._globs: list[str] = []
        self._regexes: list[re.Pattern[str]] = []
        for raw in patterns:
            pattern = raw.strip()
            if not pattern or pattern.startswith("#"):
                continue
            if len(pattern) > 2 and pattern.startswith("/") and pattern.endswith("/"):
                try:
                    self._regexes.append(re.compile(pattern[1:-1]))
                except re.error as exc:
                    raise ValueError(f"Invalid ignore pattern {pattern!r}: {exc}") from exc
            else:
                self._globs.append(pattern)

    @classmethod
    def from_config(
        cls,
        *,
        directory: str | Path = ".",
        patterns: Iterable[str] = (),
        ignore_files: Iterable[str] = (),
        include_defaults: bool = True,
    ) -> "PatternFileFilter":
        collected: list[str] = list(DEFAULT_IGNORE_PATTERNS) if include_defaults else []
        collected.extend(patterns)
        for ignore_file in ignore_files:
            path = Path(ignore_file)
            if not path.is_absolute():
                path = Path(directory) / path
            try:
                lines = path.read_text(encoding="utf-8").splitlines()
            except OSError as exc:
                raise ValueError(f"Could not read ignore file {path}: {exc}") from exc
            logger.debug("Loaded %d ignore patterns from %s", len(lines), path)
            collected.extend(lines)
        return cls(collected)

    def match(self, key: str) -> bool:
        normalized = key.replace("\\", "/")
        for regex in self._regexes:
            if regex.search(normalized):
                return True
        suffixes = _path_suffixes(normalized)
        return any(fnmatchcase(suffix, glob) for glob in self._globs for suffix in suffixes)
