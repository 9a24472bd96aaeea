"""Market-data clients."""
