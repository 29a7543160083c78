"""Credential lifecycle manager for the operational dashboard backend."""

__version__ = "1.0.0"
