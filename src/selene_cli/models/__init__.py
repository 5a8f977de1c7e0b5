"""Value objects exchanged between pipeline stages."""
