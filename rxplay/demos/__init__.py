"""Small domains used by the challenge examples."""
