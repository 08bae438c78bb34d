"""Symlink tree management."""
