"""Command-line interface for vslocate."""
