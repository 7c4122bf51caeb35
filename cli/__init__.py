"""Command-line client for the greenhouse sensor store."""
