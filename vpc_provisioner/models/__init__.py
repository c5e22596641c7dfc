"""Value objects and host protocols."""
