"""Pure naming rules."""
