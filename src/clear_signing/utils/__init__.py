"""Clear signing utilities: descriptor model, loading, decoding and formatting."""
