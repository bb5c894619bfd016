"""Command line interface for modelctl."""
