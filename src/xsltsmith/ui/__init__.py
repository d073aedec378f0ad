"""User-facing front ends."""
