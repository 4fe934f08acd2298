"""Turn files on disk (or loose mappings) into index input documents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import logging
from pathlib import Path
from typing import Any

from grounding_index.config import Settings
from grounding_index.exceptions import CorpusLoadError
from grounding_index.search.models import FileCategory, SourceDocument


logger = logging.getLogger(__name__)

BINARY_EXTENSIONS = frozenset(
    {
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".bmp",
        ".ico",
        ".webp",
        ".pdf",
        ".zip",
        ".gz",
        ".tar",
        ".whl",
        ".pyc",
        ".so",
        ".dll",
        ".exe",
        ".bin",
        ".db",
        ".sqlite",
    }
)

_SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".venv",
    "node_modules",
}


def classify_path(path: str, settings: Settings | None = None) -> FileCategory:
    """Categorize a file by its extension."""

    settings = settings or Settings()
    suffix = Path(path).suffix.lower()
    if suffix in settings.get_code_extensions():
        return FileCategory.CODE
    if suffix in settings.get_text_extensions():
        return FileCategory.TEXT
    if suffix in BINARY_EXTENSIONS:
        return FileCategory.BINARY
    return FileCategory.OTHER


def document_from_mapping(item: Mapping[str, Any], settings: Settings | None = None) -> SourceDocument:
    """Build a document from ``{"path", "content", "category"?}``.

    A missing category is derived from the path; ``None`` content becomes
    empty text.
    """

    path = str(item["path"])
    category = item.get("category") or classify_path(path, settings)
    return SourceDocument(path=path, content=item.get("content") or "", category=category)


def documents_from_mappings(
    items: Iterable[Mapping[str, Any]], settings: Settings | None = None
) -> list[SourceDocument]:
    return [document_from_mapping(item, settings) for item in items]


def _iter_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        relative_parts = path.relative_to(root).parts
        if any(part in _SKIP_DIRS for part in relative_parts):
            continue
        if path.is_file():
            yield path


def load_corpus(root: Path, settings: Settings | None = None) -> list[SourceDocument]:
    """Read every file under ``root`` into a document, sorted by relative path.

    Files that are too large or not valid UTF-8 are kept as ``binary``
    documents with empty content, so they still count toward the corpus size.

    Raises:
        CorpusLoadError: if ``root`` is not a directory.
    """

    settings = settings or Settings()
    root = Path(root).expanduser()
    if not root.is_dir():
        raise CorpusLoadError(f"Corpus root is not a directory: {root}")

    documents: list[SourceDocument] = []
    for path in _iter_files(root):
        relative = path.relative_to(root).as_posix()
        category = classify_path(relative, settings)
        content = ""
        if category is not FileCategory.BINARY:
            try:
                if path.stat().st_size > settings.max_file_bytes:
                    category = FileCategory.BINARY
                else:
                    content = path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                category = FileCategory.BINARY
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", relative, exc)
                continue
        documents.append(SourceDocument(path=relative, content=content, category=category))

    logger.debug("Loaded corpus", extra={"root": str(root), "files": len(documents)})
    return documents
