from enum import Enum
from pathlib import Path


class Language(str, Enum):
    JAVASCRIPT = "javascript"
    CSS = "css"
    HTML = "html"


EXTENSIONS: dict[str, Language] = {
    ".js": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".css": Language.CSS,
    ".html": Language.HTML,
    ".htm": Language.HTML,
}


def detect_language(path: Path | str) -> Language | None:
    """Return the language declared by a file extension, or None if unknown"""
    return EXTENSIONS.get(Path(path).suffix.lower())
