"""Terminal shell for browsing events, registering and organizing."""

from .shell import Shell

__all__ = ["Shell"]
