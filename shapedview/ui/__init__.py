"""Demo user interface."""
