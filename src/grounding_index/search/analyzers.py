"""Analyzer utilities for the lexical retrieval index.

Analyzers are composed from a tokenizer and a chain of token filters, the
same shape Whoosh uses, without pulling in a full search dependency. The
identifier analyzer is the one wired into indexing and querying: it splits
source text on anything that is not an ASCII identifier character.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
import re
from typing import Protocol


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class RegexTokenizer:
    """Regex-based tokenizer; every match becomes a token."""

    def __init__(self, pattern: str = r"[a-z0-9_]+", flags: int = 0) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for match in self.pattern.finditer(text):
            yield Token(text=match.group(0))


CODE_STOPWORDS = ["import", "from", "def", "class", "return", "self"]

MIN_TOKEN_LENGTH = 3


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = MIN_TOKEN_LENGTH) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Sequence[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else CODE_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text not in self.stopwords:
                yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return list(stream)


class IdentifierAnalyzer:
    """Lowercases, splits on non-identifier characters, drops short tokens and stopwords.

    Lowercasing happens on the whole text before tokenizing so that the
    ``[a-z0-9_]`` pattern sees the folded characters; anything that is still
    outside that class afterwards (punctuation, non-ASCII letters) acts as a
    separator.
    """

    def __init__(
        self,
        *,
        stopwords: Sequence[str] | None = None,
        min_length: int = MIN_TOKEN_LENGTH,
    ) -> None:
        filters: list[TokenFilter] = [MinLengthFilter(min_length), StopFilter(stopwords)]
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), filters)

    def __call__(self, text: str) -> list[Token]:
        if not text:
            return []
        return self.pipeline(text.lower())


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "identifier": lambda: IdentifierAnalyzer(),
}


def get_analyzer(name: str | None) -> Analyzer:
    """Return analyzer by name, defaulting to the identifier analyzer."""

    if name is None:
        return IdentifierAnalyzer()
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized]()


_DEFAULT_ANALYZER = IdentifierAnalyzer()


def tokenize(text: str) -> list[str]:
    """Return the normalized token texts for ``text``."""
    return [token.text for token in _DEFAULT_ANALYZER(text)]
