"""Unit tests for the persisted state format."""

import orjson
import pytest

from grounding_index.exceptions import GroundingIndexError, StateDecodeError
from grounding_index.search.models import IndexSnapshot
from grounding_index.search.state_codec import (
    IndexState,
    decode_state,
    encode_state,
    state_from_snapshot,
    state_to_payload,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def snapshot() -> IndexSnapshot:
    return IndexSnapshot.build(
        documents=(),
        idf={"requests": 0.405, "session": -0.2},
        metadata={"a.py": "import requests...", "b.py": "..."},
        total_documents=3,
    )


def test_state_from_snapshot_preserves_order(snapshot):
    state = state_from_snapshot(snapshot)
    assert state.idf == [("requests", 0.405), ("session", -0.2)]
    assert state.metadata == [("a.py", "import requests..."), ("b.py", "...")]


def test_payload_uses_lists_for_pairs(snapshot):
    payload = state_to_payload(state_from_snapshot(snapshot))
    assert payload == {
        "idf": [["requests", 0.405], ["session", -0.2]],
        "metadata": [["a.py", "import requests..."], ["b.py", "..."]],
    }


def test_encode_state_emits_json_bytes(snapshot):
    encoded = encode_state(state_from_snapshot(snapshot))
    assert isinstance(encoded, bytes)
    assert orjson.loads(encoded)["idf"][0] == ["requests", 0.405]


class TestDecodeState:
    def test_accepts_text_bytes_and_mappings(self, snapshot):
        expected = state_from_snapshot(snapshot)
        encoded = encode_state(expected)

        assert decode_state(encoded) == expected
        assert decode_state(encoded.decode("utf-8")) == expected
        assert decode_state(orjson.loads(encoded)) == expected

    def test_tables_are_rebuilt_as_dicts(self):
        state = decode_state('{"idf": [["alpha", 1]], "metadata": [["x.py", "x..."]]}')
        assert state.idf_table() == {"alpha": 1.0}
        assert state.metadata_table() == {"x.py": "x..."}

    @pytest.mark.parametrize("payload", ["{}", '{"unrelated": 1}', '{"idf": [], "version": 2}', '{"metadata": []}'])
    def test_missing_tables_are_rejected(self, payload):
        with pytest.raises(StateDecodeError, match="failed validation"):
            decode_state(payload)

    def test_extra_keys_next_to_both_tables_are_ignored(self):
        assert decode_state('{"idf": [], "metadata": [], "version": 2}') == IndexState(idf=[], metadata=[])

    def test_invalid_json_raises(self):
        with pytest.raises(StateDecodeError, match="Invalid index state JSON"):
            decode_state("{oops")

    def test_non_object_raises(self):
        with pytest.raises(StateDecodeError, match="must be a JSON object, got list"):
            decode_state("[]")

    def test_wrong_shape_raises(self):
        with pytest.raises(StateDecodeError, match="failed validation"):
            decode_state({"metadata": [["only-path"]]})

    def test_errors_share_package_base_class(self):
        with pytest.raises(GroundingIndexError):
            decode_state("null")
