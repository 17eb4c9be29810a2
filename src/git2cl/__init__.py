"""git2cl: generate a GNU-style ChangeLog from git history."""

VERSION = "0.1.0"

__version__ = VERSION
__all__ = ["__version__", "VERSION"]
