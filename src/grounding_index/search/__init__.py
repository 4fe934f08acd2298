"""Lexical retrieval over project files.

This package provides a pure-Python TF-IDF stack:
- analyzers: identifier tokenizer and filters
- stats: term/document frequency, IDF and cosine helpers
- snippet: display snippets stored per document
- state_codec: persisted IDF + metadata format
- vector_index: the index itself (build, search, export/import)
"""
