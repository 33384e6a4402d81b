"""Infrastructure adapters: logging, filesystem helpers and online providers."""
