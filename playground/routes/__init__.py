"""API route registration."""
