"""Command-line interface for Commet."""
