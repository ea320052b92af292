"""Runtime wiring shared by every operation."""
