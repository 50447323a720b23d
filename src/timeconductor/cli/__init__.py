"""Command-line interface for the time conductor."""
