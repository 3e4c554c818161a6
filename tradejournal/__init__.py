"""Sports-trading journal: recalculation and statistics engines."""
