"""Weld inspection registry: REST service, API client and UI state."""

__version__ = "0.1.0"
