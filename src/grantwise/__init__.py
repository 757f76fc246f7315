"""grantwise - authorization resolution engine for infrastructure management."""

__version__ = "0.1.0"
