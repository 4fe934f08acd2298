"""Serialization of the persistable part of an index.

Only the IDF table and the snippet metadata are persisted. Document vectors
are deliberately left out, so a decoded state can describe a corpus but cannot
rank it until the corpus is indexed again.

Wire format::

    {"idf": [[term, weight], ...], "metadata": [[path, snippet], ...]}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, ValidationError

from grounding_index.exceptions import StateDecodeError
from grounding_index.search.models import IndexSnapshot


class IndexState(BaseModel):
    """Validated persisted state."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    idf: list[tuple[str, float]]
    metadata: list[tuple[str, str]]

    def idf_table(self) -> dict[str, float]:
        return dict(self.idf)

    def metadata_table(self) -> dict[str, str]:
        return dict(self.metadata)


def state_from_snapshot(snapshot: IndexSnapshot) -> IndexState:
    """Capture the IDF and metadata tables of ``snapshot``."""
    return IndexState(
        idf=list(snapshot.idf.items()),
        metadata=list(snapshot.metadata.items()),
    )


def state_to_payload(state: IndexState) -> dict[str, Any]:
    """Return the JSON-ready mapping for ``state`` (tuples become lists)."""
    return state.model_dump(mode="json")


def encode_state(state: IndexState) -> bytes:
    """Serialize ``state`` to JSON bytes."""
    return orjson.dumps(state_to_payload(state))


def decode_state(blob: str | bytes | bytearray | Mapping[str, Any]) -> IndexState:
    """Parse and validate a persisted state.

    Accepts JSON text/bytes or an already decoded mapping.

    Raises:
        StateDecodeError: if the payload is not valid JSON, is not an object,
            or does not match the wire format.
    """

    if isinstance(blob, (str, bytes, bytearray)):
        try:
            data = orjson.loads(blob)
        except orjson.JSONDecodeError as exc:
            raise StateDecodeError(f"Invalid index state JSON: {exc}") from exc
    else:
        data = blob

    if not isinstance(data, Mapping):
        raise StateDecodeError(f"Index state must be a JSON object, got {type(data).__name__}")

    try:
        return IndexState.model_validate(dict(data))
    except ValidationError as exc:
        raise StateDecodeError(f"Index state failed validation: {exc.error_count()} error(s)") from exc
