"""Commit logs from version-control systems and access logs, and the directory tree they describe."""

__version__ = "0.1.0"