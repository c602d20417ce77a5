"""Route definitions for the catalog API."""
