"""Test search models functionality."""

from pydantic import ValidationError
import pytest

from grounding_index.search.models import FileCategory, IndexSnapshot, SearchHit, SourceDocument


pytestmark = pytest.mark.unit


class TestSourceDocument:
    def test_category_accepts_plain_strings(self):
        document = SourceDocument(path="main.py", content="print()", category="code")
        assert document.category is FileCategory.CODE

    def test_defaults(self):
        document = SourceDocument(path="blob")
        assert document.content == ""
        assert document.category is FileCategory.OTHER

    def test_is_frozen(self):
        document = SourceDocument(path="main.py")
        with pytest.raises(ValidationError):
            document.path = "other.py"


class TestSearchHit:
    def test_score_must_be_positive_and_at_most_one(self):
        with pytest.raises(ValidationError):
            SearchHit(path="a.py", score=0.0, snippet="...")
        with pytest.raises(ValidationError):
            SearchHit(path="a.py", score=1.01, snippet="...")

    def test_dump(self):
        hit = SearchHit(path="a.py", score=0.5, snippet="x...")
        assert hit.model_dump() == {"path": "a.py", "score": 0.5, "snippet": "x..."}


def test_snapshot_tables_are_read_only():
    snapshot = IndexSnapshot.build(documents=(), idf={"a": 1.0}, metadata={}, total_documents=1)
    with pytest.raises(TypeError):
        snapshot.idf["b"] = 2.0  # type: ignore[index]


def test_empty_snapshot_defaults():
    snapshot = IndexSnapshot()
    assert snapshot.documents == ()
    assert dict(snapshot.idf) == {}
    assert snapshot.total_documents == 0
