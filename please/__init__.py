"""please - batch git operations across every repository under a workspace root."""

__version__ = "0.1.0"
