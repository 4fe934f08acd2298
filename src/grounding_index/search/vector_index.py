"""In-memory TF-IDF index ranking project files against free-text queries.

The index owns exactly one :class:`IndexSnapshot` at a time. A rebuild
computes vectors, IDF and metadata into local structures and then publishes
a new snapshot with a single reference assignment. Readers grab the
reference once per call, so a query running next to a rebuild sees either
the old corpus or the new one, never a mix.

Only the IDF and metadata tables survive :meth:`VectorIndex.export_state`.
An index restored with :meth:`VectorIndex.import_state` therefore knows the
vocabulary and the snippets but has no document vectors, and returns no
hits until :meth:`VectorIndex.create_index` runs again.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
import logging
import threading
import time
from types import MappingProxyType
from typing import Any

from grounding_index.config import Settings
from grounding_index.corpus import document_from_mapping
from grounding_index.exceptions import StateDecodeError
from grounding_index.observability.metrics import (
    BUILD_LATENCY,
    INDEXED_DOCUMENTS,
    SEARCH_LATENCY,
    STATE_IMPORT_FAILURES,
    track_latency,
)
from grounding_index.observability.tracing import create_span
from grounding_index.search.analyzers import Analyzer, get_analyzer
from grounding_index.search.models import (
    DocumentVector,
    FileCategory,
    IndexBuildResult,
    IndexSnapshot,
    SearchHit,
    SourceDocument,
)
from grounding_index.search.snippet import build_summary_snippet
from grounding_index.search.state_codec import decode_state, encode_state, state_from_snapshot, state_to_payload
from grounding_index.search.stats import (
    calculate_idf,
    cosine_similarity,
    document_frequencies,
    term_frequencies,
    vector_magnitude,
    weigh,
)


logger = logging.getLogger(__name__)


class VectorIndex:
    """TF-IDF vector space over one corpus of project files."""

    def __init__(self, settings: Settings | None = None, *, analyzer: Analyzer | None = None) -> None:
        self.settings = settings or Settings()
        self._analyzer = analyzer or get_analyzer(self.settings.analyzer)
        self._text_extensions = tuple(self.settings.get_text_extensions())
        self._snapshot = IndexSnapshot()
        self._write_lock = threading.Lock()

    # ---------- read-only views ----------
    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    @property
    def idf(self) -> Mapping[str, float]:
        return self._snapshot.idf

    @property
    def metadata(self) -> Mapping[str, str]:
        return self._snapshot.metadata

    @property
    def document_count(self) -> int:
        return len(self._snapshot.documents)

    @property
    def is_searchable(self) -> bool:
        """True when the published snapshot carries document vectors."""
        return bool(self._snapshot.documents)

    def tokenize(self, text: str) -> list[str]:
        return [token.text for token in self._analyzer(text) if token.text]

    def is_vectorizable(self, document: SourceDocument) -> bool:
        """Code files and recognized plain-text/markdown files are vectorized."""
        if document.category is FileCategory.CODE:
            return True
        return document.path.lower().endswith(self._text_extensions)

    # ---------- indexing ----------
    def create_index(self, documents: Iterable[SourceDocument | Mapping[str, Any]]) -> IndexBuildResult:
        """Replace the whole index with one built from ``documents``.

        Items may be :class:`SourceDocument` instances or ``{"path", "content",
        "category"?}`` mappings. Every input document counts toward the IDF
        denominator, including the ones that are not vectorized. A repeated
        path keeps its last occurrence; the earlier ones count as skipped.
        """

        start = time.perf_counter()
        items = [self._as_document(item) for item in documents]
        with create_span("grounding_index.create_index", documents=len(items)), track_latency(BUILD_LATENCY):
            with self._write_lock:
                snapshot, skipped = self._build_snapshot(items)
                self._snapshot = snapshot

        vectorized = len(snapshot.documents)
        INDEXED_DOCUMENTS.labels(kind="vectorized").set(vectorized)
        INDEXED_DOCUMENTS.labels(kind="received").set(len(items))
        result = IndexBuildResult(
            documents_received=len(items),
            documents_vectorized=vectorized,
            documents_skipped=skipped,
            vocabulary_size=len(snapshot.idf),
            duration_s=time.perf_counter() - start,
        )
        logger.info(
            "Indexed %d files",
            vectorized,
            extra={
                "documents_received": result.documents_received,
                "documents_skipped": result.documents_skipped,
                "vocabulary_size": result.vocabulary_size,
                "duration_s": round(result.duration_s, 4),
            },
        )
        return result

    def _as_document(self, item: SourceDocument | Mapping[str, Any]) -> SourceDocument:
        if isinstance(item, SourceDocument):
            return item
        return document_from_mapping(item, self.settings)

    def _build_snapshot(self, items: list[SourceDocument]) -> tuple[IndexSnapshot, int]:
        total_documents = len(items)
        tf_maps: dict[str, Counter[str]] = {}
        metadata: dict[str, str] = {}
        skipped = 0

        for document in items:
            if document.path in tf_maps:
                del tf_maps[document.path]
                del metadata[document.path]
                skipped += 1
            if not self.is_vectorizable(document):
                skipped += 1
                continue
            tf_maps[document.path] = term_frequencies(self.tokenize(document.content))
            metadata[document.path] = build_summary_snippet(document.content, self.settings.snippet_length)

        doc_freq = document_frequencies(tf_maps.values())
        idf = {term: calculate_idf(count, total_documents) for term, count in doc_freq.items()}

        vectors: list[DocumentVector] = []
        for path, tf in tf_maps.items():
            weights = weigh(tf, idf)
            vectors.append(
                DocumentVector(
                    path=path,
                    weights=MappingProxyType(weights),
                    magnitude=vector_magnitude(weights),
                )
            )

        snapshot = IndexSnapshot.build(
            documents=tuple(vectors),
            idf=idf,
            metadata=metadata,
            total_documents=total_documents,
        )
        return snapshot, skipped

    # ---------- querying ----------
    def search(self, query: str, limit: int | None = None) -> list[SearchHit]:
        """Rank indexed documents by cosine similarity to ``query``.

        The query is projected onto the current IDF table; terms the corpus
        never saw carry no weight. Returns at most ``limit`` hits scoring
        strictly above the configured threshold, best first.
        """

        snapshot = self._snapshot
        max_results = self.settings.default_limit if limit is None else limit
        if max_results < 1:
            return []

        threshold = self.settings.similarity_threshold
        with create_span("grounding_index.search", limit=max_results), track_latency(SEARCH_LATENCY):
            query_vector = weigh(term_frequencies(self.tokenize(query)), snapshot.idf)
            query_magnitude = vector_magnitude(query_vector)
            if query_magnitude == 0:
                logger.debug("Query has no weight in the current vocabulary", extra={"query": query})
                return []

            scored: list[tuple[float, str]] = []
            for document in snapshot.documents:
                similarity = cosine_similarity(query_vector, query_magnitude, document.weights, document.magnitude)
                if similarity > threshold:
                    scored.append((similarity, document.path))

            scored.sort(key=lambda item: item[0], reverse=True)
            return [
                SearchHit(path=path, score=score, snippet=snapshot.metadata.get(path, ""))
                for score, path in scored[:max_results]
            ]

    # ---------- persistence ----------
    def export_state(self) -> dict[str, Any]:
        """Return the IDF and metadata tables as a JSON-ready mapping."""
        return state_to_payload(state_from_snapshot(self._snapshot))

    def export_state_json(self) -> str:
        return encode_state(state_from_snapshot(self._snapshot)).decode("utf-8")

    def import_state(self, blob: str | bytes | Mapping[str, Any]) -> bool:
        """Restore IDF and metadata from a persisted state.

        On success the published snapshot holds the restored tables and no
        document vectors. A malformed payload is logged and leaves the
        current snapshot untouched.

        Returns:
            True if the state was applied, False if it was rejected.
        """

        try:
            state = decode_state(blob)
        except StateDecodeError as exc:
            STATE_IMPORT_FAILURES.inc()
            logger.warning("Failed to load vector index state: %s", exc)
            return False

        snapshot = IndexSnapshot.build(
            documents=(),
            idf=state.idf_table(),
            metadata=state.metadata_table(),
            total_documents=0,
        )
        with self._write_lock:
            self._snapshot = snapshot

        INDEXED_DOCUMENTS.labels(kind="vectorized").set(0)
        logger.info(
            "Restored index state",
            extra={"terms": len(snapshot.idf), "documents_described": len(snapshot.metadata)},
        )
        return True
