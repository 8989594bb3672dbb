"""repogate: GitHub OAuth login plus an allow-listed repository proxy."""

__version__ = "0.1.0"
