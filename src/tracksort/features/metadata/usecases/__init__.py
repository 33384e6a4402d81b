"""Use cases turning audio files into canonical track records."""
