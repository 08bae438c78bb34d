"""Source tree collection."""
