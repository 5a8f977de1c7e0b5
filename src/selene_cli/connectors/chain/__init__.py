"""CosmWasm chain connectors."""
