"""Command line interface for rowmeta-uuid."""
