"""Application services (configuration, logging)."""
