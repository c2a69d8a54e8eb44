"""Command-line interface for inkbook."""
