"""Process-level configuration."""
