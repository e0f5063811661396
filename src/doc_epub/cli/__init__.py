"""Command-line interface for doc-epub."""
