"""Storage and transport."""
