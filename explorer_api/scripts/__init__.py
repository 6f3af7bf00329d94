"""Command-line tools for the Explorer API."""
