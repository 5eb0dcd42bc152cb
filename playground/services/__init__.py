"""Service layer for upload handling."""
