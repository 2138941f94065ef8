"""Entry encoding, a file-handle cache, error types and in-memory data structures for an embedded key/value store."""

__version__ = "0.1.0"