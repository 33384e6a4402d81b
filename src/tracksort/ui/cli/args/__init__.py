"""Command line argument parsing."""

from .options import OrganizeArgs
from .parser import ArgumentParser

__all__ = ["ArgumentParser", "OrganizeArgs"]
