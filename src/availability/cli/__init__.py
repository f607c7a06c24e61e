"""Command-line interface for availability documents."""
