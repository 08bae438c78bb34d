"""Bucket assignment strategies."""
