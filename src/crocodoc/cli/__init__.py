"""Command-line interface for crocodoc."""
