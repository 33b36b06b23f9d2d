"""Infrastructure adapters (database, filesystem)."""
