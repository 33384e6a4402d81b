"""Use cases that write the organized library."""
