"""Request dialog support."""
