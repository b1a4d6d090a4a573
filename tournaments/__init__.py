"""Players, nested tournaments and registrations."""
