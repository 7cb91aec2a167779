"""lineage CLI commands."""
