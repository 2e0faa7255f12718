"""Application layer - allocation use cases over ports."""
