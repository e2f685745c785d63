"""Configuration and read-only project loading."""
