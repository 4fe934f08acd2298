"""Shared test fixtures and configuration."""

import os

import pytest


# Pin every setting so a developer's environment or .env cannot leak in
TEST_ENV = {
    "GROUNDING_INDEX_SIMILARITY_THRESHOLD": "0.1",
    "GROUNDING_INDEX_DEFAULT_LIMIT": "3",
    "GROUNDING_INDEX_ANALYZER": "identifier",
    "GROUNDING_INDEX_SNIPPET_LENGTH": "200",
    "GROUNDING_INDEX_TEXT_EXTENSIONS": ".txt,.md",
    "GROUNDING_INDEX_CODE_EXTENSIONS": ".py",
    "GROUNDING_INDEX_MAX_FILE_BYTES": "1000000",
    "GROUNDING_INDEX_LOG_LEVEL": "info",
    "GROUNDING_INDEX_LOG_JSON": "false",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("GROUNDING_INDEX_STATE_PATH", None)

from grounding_index.config import Settings
from grounding_index.search.models import FileCategory, SourceDocument
from grounding_index.search.vector_index import VectorIndex


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset configuration environment variables before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("GROUNDING_INDEX_STATE_PATH", raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def index(settings: Settings) -> VectorIndex:
    return VectorIndex(settings)


def _make_doc(path: str, content: str = "", category: FileCategory = FileCategory.CODE) -> SourceDocument:
    return SourceDocument(path=path, content=content, category=category)


@pytest.fixture
def make_doc():
    """Factory for documents; category defaults to code."""
    return _make_doc


@pytest.fixture
def requests_corpus() -> list[SourceDocument]:
    """Two source files plus one binary asset, so N=3 and singleton terms keep positive IDF."""
    return [
        _make_doc("a.py", "def foo(): import requests\nrequests.get(url)"),
        _make_doc("b.py", "def bar(): pass"),
        _make_doc("logo.png", "", FileCategory.BINARY),
    ]
