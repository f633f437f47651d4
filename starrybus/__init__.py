"""Terminal bus arrival board."""
