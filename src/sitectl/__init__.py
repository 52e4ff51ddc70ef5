"""Command-line interface for sitectl."""
