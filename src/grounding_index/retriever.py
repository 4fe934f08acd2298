"""Owner of the index used to ground assistant answers in project files."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import Any

from grounding_index.config import Settings
from grounding_index.search.models import IndexBuildResult, SearchHit, SourceDocument
from grounding_index.search.vector_index import VectorIndex
from grounding_index.state_store import StateStore


logger = logging.getLogger(__name__)


class GroundingRetriever:
    """Builds, caches and queries one :class:`VectorIndex`.

    The retriever is the only writer of its index. Rebuilds may run on a
    worker thread through :meth:`refresh_async`; queries issued meanwhile
    are answered from the previously published snapshot.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        index: VectorIndex | None = None,
        store: StateStore | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.index = index or VectorIndex(self.settings)
        if store is None and self.settings.state_path is not None:
            store = StateStore(self.settings.state_path)
        self.store = store

    def refresh(self, documents: Iterable[SourceDocument | Mapping[str, Any]]) -> IndexBuildResult:
        """Rebuild the index from the full corpus and persist its state."""
        result = self.index.create_index(documents)
        if self.store is not None:
            self.store.save(self.index)
        return result

    async def refresh_async(self, documents: Iterable[SourceDocument | Mapping[str, Any]]) -> IndexBuildResult:
        """Run :meth:`refresh` on a worker thread."""
        items = list(documents)
        return await asyncio.to_thread(self.refresh, items)

    def restore(self) -> bool:
        """Warm-start IDF and metadata from the store.

        The restored index still has no vectors; call :meth:`refresh` before
        relying on :meth:`select_context`.
        """
        if self.store is None:
            return False
        restored = self.store.load(self.index)
        if restored:
            logger.info("Index state restored; rebuild required before search", extra={"path": str(self.store.path)})
        return restored

    def select_context(self, query: str, limit: int | None = None) -> list[SearchHit]:
        """Return the files most relevant to ``query``."""
        return self.index.search(query, limit)

    @staticmethod
    def render_context(hits: Sequence[SearchHit]) -> str:
        """Format hits as a plain-text block for a prompt builder."""
        if not hits:
            return ""
        return "\n".join(f"[{hit.path}] (score {hit.score:.2f})\n{hit.snippet}\n" for hit in hits)
