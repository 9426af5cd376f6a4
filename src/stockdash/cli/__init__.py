"""Command-line interface for stockdash."""
