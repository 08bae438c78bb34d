"""Filesystem and filename helpers."""
