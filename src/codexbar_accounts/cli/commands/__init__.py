"""Command implementations for the codexbar-accounts CLI."""
