"""File-backed cache for exported index state."""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from grounding_index.search.state_codec import encode_state, state_from_snapshot
from grounding_index.search.vector_index import VectorIndex


logger = logging.getLogger(__name__)


class StateStore:
    """Persists the IDF + metadata of a :class:`VectorIndex` to one JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, index: VectorIndex) -> Path:
        """Write the current state atomically (temp file, then replace)."""
        serialized = encode_state(state_from_snapshot(index.snapshot))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.{uuid4().hex}.tmp")
        tmp_path.write_bytes(serialized)
        tmp_path.replace(self.path)
        logger.debug("Saved index state", extra={"path": str(self.path), "bytes": len(serialized)})
        return self.path

    def load(self, index: VectorIndex) -> bool:
        """Apply the cached state to ``index``.

        Returns False when there is no cache file or the file is rejected;
        ``index`` is left as it was in both cases.
        """
        if not self.exists():
            logger.debug("No cached index state at %s", self.path)
            return False
        try:
            payload = self.path.read_bytes()
        except OSError as exc:
            logger.warning("Could not read index state %s: %s", self.path, exc)
            return False
        return index.import_state(payload)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
