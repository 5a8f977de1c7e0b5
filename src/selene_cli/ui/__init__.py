"""Terminal rendering and prompts."""
