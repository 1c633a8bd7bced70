"""Click command groups registered on the core CLI."""
