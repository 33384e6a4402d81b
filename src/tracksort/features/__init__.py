"""Feature packages: metadata, path building, organization and statistics."""
