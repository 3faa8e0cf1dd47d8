"""Infrastructure layer: SQL generation independent of any live connection."""
