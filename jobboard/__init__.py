"""Job board models, search and recommendation services, repositories and HTTP handlers."""

__version__ = "0.1.0"