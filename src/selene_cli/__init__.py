"""Selene Markets command-line trading client."""

__version__ = "0.1.0"
