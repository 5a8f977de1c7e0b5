"""Core enums, exceptions, result type and interfaces."""
