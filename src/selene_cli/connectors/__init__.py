"""Chain connectors."""
