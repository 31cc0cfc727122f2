"""Command-line runner for local compilation."""
