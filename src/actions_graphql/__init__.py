"""Authenticated GitHub GraphQL clients for GitHub Actions steps."""

__version__ = "0.1.0"
