"""Contract query adapters."""
