"""HTTP API for the orders service."""
