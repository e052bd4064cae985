"""Adapters for collaborators of the analysis engine."""
