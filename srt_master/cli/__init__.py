"""Command-line interface for SRT Master."""
