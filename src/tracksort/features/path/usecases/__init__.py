"""Path building use cases."""
