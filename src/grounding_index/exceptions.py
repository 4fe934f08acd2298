"""Exception hierarchy for grounding-index."""


class GroundingIndexError(Exception):
    """Base class for errors raised by this package."""


class StateDecodeError(GroundingIndexError):
    """Raised when a persisted index state cannot be parsed or validated."""


class CorpusLoadError(GroundingIndexError):
    """Raised when a corpus cannot be read from disk."""
