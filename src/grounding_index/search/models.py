"""Search data models.

Input documents and output hits are pydantic value objects so they validate
at the boundary; the per-build vector structures are frozen dataclasses
because they are produced internally and read on every query.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class FileCategory(str, Enum):
    """Coarse classification of a project file."""

    CODE = "code"
    TEXT = "text"
    OTHER = "other"
    BINARY = "binary"


class SourceDocument(BaseModel):
    """A file handed to the index for a build."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str = ""
    category: FileCategory = FileCategory.OTHER


class SearchHit(BaseModel):
    """A single ranked result."""

    model_config = ConfigDict(frozen=True)

    path: str
    score: float = Field(gt=0.0, le=1.0)
    snippet: str


@dataclass(frozen=True)
class DocumentVector:
    """Sparse TF-IDF vector for one document."""

    path: str
    weights: Mapping[str, float]
    magnitude: float


def _frozen(mapping: Mapping[str, float | str] | None = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class IndexSnapshot:
    """Everything one build produced. Published as a single reference."""

    documents: tuple[DocumentVector, ...] = ()
    idf: Mapping[str, float] = field(default_factory=_frozen)
    metadata: Mapping[str, str] = field(default_factory=_frozen)
    total_documents: int = 0

    @classmethod
    def build(
        cls,
        documents: tuple[DocumentVector, ...],
        idf: Mapping[str, float],
        metadata: Mapping[str, str],
        total_documents: int,
    ) -> IndexSnapshot:
        return cls(
            documents=documents,
            idf=_frozen(idf),
            metadata=_frozen(metadata),
            total_documents=total_documents,
        )


@dataclass(frozen=True)
class IndexBuildResult:
    """Outcome of a ``create_index`` run."""

    documents_received: int
    documents_vectorized: int
    documents_skipped: int
    vocabulary_size: int
    duration_s: float
