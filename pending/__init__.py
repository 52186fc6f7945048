"""Find Git repositories with pending work."""

__version__ = "0.1.0"
