"""Synchronizes Jira issue metadata onto GitHub pull requests."""

__version__ = "0.1.0"
