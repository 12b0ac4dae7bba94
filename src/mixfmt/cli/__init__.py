"""Command line interface for mixfmt."""
