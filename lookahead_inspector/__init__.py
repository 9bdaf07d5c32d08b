"""Command line inspection of large JSON files."""
