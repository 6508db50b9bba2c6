"""Domain name portfolio tracker: REST API, API client and CLI."""

__version__ = "1.0.0"
