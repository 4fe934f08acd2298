"""Local lexical retrieval for grounding assistant answers in project files."""

from grounding_index.config import Settings
from grounding_index.retriever import GroundingRetriever
from grounding_index.search.models import FileCategory, IndexBuildResult, SearchHit, SourceDocument
from grounding_index.search.vector_index import VectorIndex


__all__ = [
    "FileCategory",
    "GroundingRetriever",
    "IndexBuildResult",
    "SearchHit",
    "Settings",
    "SourceDocument",
    "VectorIndex",
]
