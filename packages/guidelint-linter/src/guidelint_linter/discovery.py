import glob
import logging
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable

from guidelint_syntax import Language, detect_language

from .errors import DiscoveryError

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES = ("node_modules", ".git", "*.min.js", "*.min.css")
_GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True, order=True)
class SourceFile:
    path: Path
    language: Language


def is_excluded(path: Path, patterns: Iterable[str]) -> bool:
    """True if the path, or any single part of it, matches an exclude pattern"""
    text = path.as_posix()
    for pattern in patterns:
        if fnmatch(text, pattern) or any(fnmatch(part, pattern) for part in path.parts):
            return True
    return False


def _candidates(target: str) -> list[Path]:
    if _GLOB_CHARS & set(target):
        return [Path(match) for match in sorted(glob.glob(target, recursive=True))]
    path = Path(target)
    if not path.exists():
        raise DiscoveryError(f"Path does not exist: {target}")
    return [path]


def discover_files(
    paths: Iterable[Path | str],
    exclude: Iterable[str] = (),
    use_default_excludes: bool = True,
) -> list[SourceFile]:
    """Expand files, directories and glob patterns into the source files to check"""
    patterns = list(exclude)
    if use_default_excludes:
        patterns.extend(DEFAULT_EXCLUDES)

    found: dict[Path, SourceFile] = {}
    for target in paths:
        for candidate in _candidates(str(target)):
            if candidate.is_dir():
                files = (path for path in candidate.rglob("*") if path.is_file())
            else:
                files = [candidate]
            for path in files:
                language = detect_language(path)
                if language is None or path in found:
                    continue
                if is_excluded(path, patterns):
                    logger.debug("Excluded %s", path)
                    continue
                found[path] = SourceFile(path, language)

    logger.debug("Discovered %d files", len(found))
    return sorted(found.values())
