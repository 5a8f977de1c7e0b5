"""Order-book message encoding."""
