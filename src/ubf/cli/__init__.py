"""Command-line interface for ubf."""
