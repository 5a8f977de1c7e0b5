"""Order flow and transaction dispatch."""
