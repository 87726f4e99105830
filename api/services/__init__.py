"""Service modules for the API."""

from .matching import matching_service

__all__ = [
    "matching_service",
]
