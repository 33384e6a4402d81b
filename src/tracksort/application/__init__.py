"""Application layer: services shared by every user interface."""
