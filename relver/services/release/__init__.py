"""Release versioning, tagging and changelog services."""
