"""Infrastructure layer - store adapters, server lifecycle and logging."""
