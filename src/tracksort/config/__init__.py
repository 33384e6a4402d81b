"""Configuration loading, locations and fixed runtime settings."""
