"""Ports - interfaces/protocols for external dependencies."""

from .connector import Connector

__all__ = [
    "Connector",
]
