"""Cache of generation results."""
