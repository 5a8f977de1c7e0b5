"""Configuration: settings and network constants."""
